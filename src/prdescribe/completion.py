from __future__ import annotations

from typing import Any

import httpx

from .config import DEFAULT_MODEL, DEFAULT_OPENAI_API_URL, DEFAULT_TIMEOUT, validate_model
from .errors import ApiError, AuthError, NetworkError

_COMPLETIONS_PATH = "/v1/chat/completions"

TEMPERATURE = 0.7
MAX_TOKENS = 300
FREQUENCY_PENALTY = 0


def build_request_body(prompt: str, model: str) -> dict[str, Any]:
    return {
        "temperature": TEMPERATURE,
        "max_tokens": MAX_TOKENS,
        "frequency_penalty": FREQUENCY_PENALTY,
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
    }


def extract_content(data: Any) -> str:
    """Return the first choice's message content.

    A response without choices is treated as a failed completion rather than an
    empty summary, so nothing gets posted on the pull request.
    """
    choices = data.get("choices") if isinstance(data, dict) else None
    if not choices:
        raise ApiError("Completion response contained no choices.")
    try:
        content = choices[0]["message"]["content"]
    except (KeyError, TypeError) as exc:
        raise ApiError(f"Malformed completion choice: {choices[0]!r}") from exc
    return content or ""


class CompletionClient:
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_OPENAI_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.model = validate_model(model)
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout),
        )

    def __enter__(self) -> CompletionClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self._client.close()

    def complete(self, prompt: str) -> str:
        try:
            response = self._client.post(_COMPLETIONS_PATH, json=build_request_body(prompt, self.model))
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Completion request timed out: {exc}") from exc
        except httpx.RequestError as exc:
            raise NetworkError(str(exc)) from exc

        if response.status_code == 401:
            raise AuthError("Completion API key is invalid.", status_code=401)
        if not response.is_success:
            raise ApiError(
                f"Completion API returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ApiError(f"Completion API returned invalid JSON: {exc}") from exc
        return extract_content(data)
