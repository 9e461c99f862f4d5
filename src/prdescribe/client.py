from __future__ import annotations

from typing import Any

import httpx

from .config import DEFAULT_GITHUB_API_URL, DEFAULT_TIMEOUT
from .errors import ApiError, AuthError, NetworkError
from .models import ChangedFile, Label, PublishResult, PullRequestRef


class GitHubClient:
    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github.v3+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
            timeout=httpx.Timeout(timeout),
        )

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self._client.close()

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request; transport failures become NetworkError."""
        try:
            return self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Request to {path} timed out: {exc}") from exc
        except httpx.RequestError as exc:
            raise NetworkError(str(exc)) from exc

    def get_json(self, path: str) -> Any:
        response = self.request("GET", path)

        if response.status_code == 401:
            raise AuthError("GitHub token is invalid or missing required scopes.", status_code=401)
        if not response.is_success:
            raise ApiError(
                f"GitHub API returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"GitHub API returned invalid JSON for {path}: {exc}") from exc

    def fetch_labels(self, pr: PullRequestRef) -> list[Label]:
        data = self.get_json(f"/repos/{pr.repo_full_name}/pulls/{pr.number}")
        if not isinstance(data, dict):
            raise ApiError(f"Unexpected pull request payload for #{pr.number}.")
        return [self._parse_label(node) for node in data.get("labels") or []]

    def fetch_changed_files(self, pr: PullRequestRef) -> list[ChangedFile]:
        # Only the first page is consumed; GitHub returns up to 30 files by default.
        data = self.get_json(f"/repos/{pr.repo_full_name}/pulls/{pr.number}/files")
        if not isinstance(data, list):
            raise ApiError(f"Unexpected changed-files payload for #{pr.number}.")
        return [self._parse_changed_file(node) for node in data]

    def post_comment(self, pr: PullRequestRef, body: str) -> PublishResult:
        """Create an issue comment; the status code is reported, never raised."""
        response = self.request(
            "POST",
            f"/repos/{pr.repo_full_name}/issues/{pr.number}/comments",
            json={"body": body},
        )
        return PublishResult(status_code=response.status_code)

    @staticmethod
    def _parse_label(node: dict[str, Any]) -> Label:
        try:
            return Label(name=node["name"])
        except (KeyError, TypeError) as exc:
            raise ApiError(f"Malformed label entry: {node!r}") from exc

    @staticmethod
    def _parse_changed_file(node: dict[str, Any]) -> ChangedFile:
        try:
            return ChangedFile(filename=node["filename"], patch=node.get("patch"))
        except (KeyError, TypeError, AttributeError) as exc:
            raise ApiError(f"Malformed changed-file entry: {node!r}") from exc
