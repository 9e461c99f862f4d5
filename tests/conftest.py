"""Shared factories and fixtures for the test suite."""
from __future__ import annotations

import pytest

from prdescribe.config import Config
from prdescribe.models import ChangedFile, Label, PublishResult, PullRequestRef

GITHUB_API = "https://api.github.com"
OPENAI_API = "https://api.openai.com"
REPO = "owner/repo"
PR_NUMBER = 7

PR_URL = f"{GITHUB_API}/repos/{REPO}/pulls/{PR_NUMBER}"
FILES_URL = f"{GITHUB_API}/repos/{REPO}/pulls/{PR_NUMBER}/files"
COMMENTS_URL = f"{GITHUB_API}/repos/{REPO}/issues/{PR_NUMBER}/comments"
COMPLETIONS_URL = f"{OPENAI_API}/v1/chat/completions"

# ---------------------------------------------------------------------------
# REST payload factories — return raw dicts that mirror API responses
# ---------------------------------------------------------------------------


def label_node(name: str = "ai-describe") -> dict:
    return {"id": 1, "name": name, "color": "ededed", "default": False}


def pr_payload(labels: list[str] | None = None, number: int = PR_NUMBER) -> dict:
    return {
        "number": number,
        "title": "Add feature",
        "state": "open",
        "labels": [label_node(name) for name in (labels or [])],
    }


def file_node(filename: str = "src/app.py", patch: str | None = "@@ -1 +1 @@\n-old\n+new") -> dict:
    node = {"filename": filename, "status": "modified", "additions": 1, "deletions": 1}
    if patch is not None:
        node["patch"] = patch
    return node


def completion_response(*contents: str) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "choices": [
            {"index": i, "message": {"role": "assistant", "content": c}, "finish_reason": "stop"}
            for i, c in enumerate(contents)
        ],
    }


def action_env(**overrides: str) -> dict[str, str]:
    env = {
        "INPUT_PR-NUMBER": str(PR_NUMBER),
        "GITHUB_REPOSITORY": REPO,
        "INPUT_GITHUB-TOKEN": "gh-token",
        "INPUT_GITHUB-API-BASE-URL": GITHUB_API,
        "INPUT_OPENAI-API-KEY": "sk-test",
    }
    env.update(overrides)
    return env


# ---------------------------------------------------------------------------
# Model object factories and fakes
# ---------------------------------------------------------------------------


def make_config(**overrides) -> Config:
    fields = {
        "pr_number": PR_NUMBER,
        "repo_full_name": REPO,
        "github_token": "gh-token",
        "openai_api_key": "sk-test",
    }
    fields.update(overrides)
    return Config(**fields)


def make_pr_ref(repo: str = REPO, number: int = PR_NUMBER) -> PullRequestRef:
    return PullRequestRef(repo, number)


class FakeGitHub:
    """In-memory stand-in for GitHubClient that records every call."""

    def __init__(
        self,
        labels: list[str] | None = None,
        files: list[ChangedFile] | None = None,
        status_code: int = 201,
    ) -> None:
        self.labels = [Label(name) for name in (labels or [])]
        self.files = files or []
        self.status_code = status_code
        self.calls: list[str] = []
        self.posted: list[str] = []

    def fetch_labels(self, pr: PullRequestRef) -> list[Label]:
        self.calls.append("fetch_labels")
        return self.labels

    def fetch_changed_files(self, pr: PullRequestRef) -> list[ChangedFile]:
        self.calls.append("fetch_changed_files")
        return self.files

    def post_comment(self, pr: PullRequestRef, body: str) -> PublishResult:
        self.calls.append("post_comment")
        self.posted.append(body)
        return PublishResult(self.status_code)


class FakeCompleter:
    def __init__(self, reply: str = "Summary") -> None:
        self.reply = reply
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


# ---------------------------------------------------------------------------
# Autouse fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def no_dotenv(mocker):
    """Prevent tests from loading a real .env file."""
    mocker.patch("prdescribe.cli.load_dotenv")
