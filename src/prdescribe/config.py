from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError, InvalidModelError
from .models import PullRequestRef

DEFAULT_MODEL = "gpt-3.5-turbo"
ALLOWED_MODELS = (DEFAULT_MODEL, "gpt-4", "gpt-4-32k")
DEFAULT_LABEL = "ai-describe"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_OPENAI_API_URL = "https://api.openai.com"
DEFAULT_TIMEOUT = 30.0

# GitHub Actions exposes `with:` inputs as INPUT_<NAME> with the name upper-cased.
ENV_PR_NUMBER = "INPUT_PR-NUMBER"
ENV_REPOSITORY = "GITHUB_REPOSITORY"
ENV_EVENT_PATH = "GITHUB_EVENT_PATH"
ENV_GITHUB_TOKEN = "INPUT_GITHUB-TOKEN"
ENV_GITHUB_API_URL = "INPUT_GITHUB-API-BASE-URL"
ENV_OPENAI_API_KEY = "INPUT_OPENAI-API-KEY"
ENV_OPENAI_MODEL = "INPUT_OPENAI-MODEL"
ENV_OPENAI_API_URL = "INPUT_OPENAI-API-BASE-URL"
ENV_LABEL = "INPUT_LABEL"
ENV_TIMEOUT = "INPUT_TIMEOUT"


@dataclass(frozen=True)
class Config:
    """Everything a run needs, read once at startup."""

    pr_number: int
    repo_full_name: str
    github_token: str
    openai_api_key: str
    model: str = DEFAULT_MODEL
    label: str = DEFAULT_LABEL
    github_api_url: str = DEFAULT_GITHUB_API_URL
    openai_api_url: str = DEFAULT_OPENAI_API_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        validate_model(self.model)
        validate_repo_full_name(self.repo_full_name)
        if self.pr_number <= 0:
            raise ConfigError(f"Pull request number must be positive, got {self.pr_number}.")
        if not self.github_token:
            raise ConfigError(f"{ENV_GITHUB_TOKEN} is not set.")
        if not self.openai_api_key:
            raise ConfigError(f"{ENV_OPENAI_API_KEY} is not set.")
        if not self.label:
            raise ConfigError("Target label must not be empty.")
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigError(f"Timeout must be a positive finite number, got {self.timeout}.")

    @property
    def pull_request(self) -> PullRequestRef:
        return PullRequestRef(self.repo_full_name, self.pr_number)

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> Config:
        # Model is checked first so an invalid one is reported ahead of anything else.
        model = environ.get(ENV_OPENAI_MODEL) or DEFAULT_MODEL
        validate_model(model)

        return cls(
            pr_number=_pr_number_from_env(environ),
            repo_full_name=_required(environ, ENV_REPOSITORY),
            github_token=_required(environ, ENV_GITHUB_TOKEN),
            openai_api_key=_required(environ, ENV_OPENAI_API_KEY),
            model=model,
            label=environ.get(ENV_LABEL) or DEFAULT_LABEL,
            github_api_url=(environ.get(ENV_GITHUB_API_URL) or DEFAULT_GITHUB_API_URL).rstrip("/"),
            openai_api_url=(environ.get(ENV_OPENAI_API_URL) or DEFAULT_OPENAI_API_URL).rstrip("/"),
            timeout=_parse_float(environ.get(ENV_TIMEOUT), ENV_TIMEOUT, DEFAULT_TIMEOUT),
        )


def validate_model(model: str) -> str:
    if model not in ALLOWED_MODELS:
        allowed = ", ".join(f"'{m}'" for m in ALLOWED_MODELS)
        raise InvalidModelError(f"Invalid model specified: {model!r}. Please use one of {allowed}.")
    return model


def validate_repo_full_name(repo: str) -> str:
    owner, _, name = repo.partition("/")
    if not owner or not name or "/" in name:
        raise ConfigError(f"{repo!r} is not a valid OWNER/REPO name.")
    return repo


def read_event_pr_number(event_path: str | Path) -> int:
    """Read the pull request number from a GitHub event payload file."""
    try:
        data = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Cannot read event payload {event_path}: {exc}") from exc

    number = (data.get("pull_request") or {}).get("number") if isinstance(data, dict) else None
    if number is None:
        raise ConfigError("Pull request number not found in event data.")
    return _parse_int(str(number), ENV_EVENT_PATH)


def _pr_number_from_env(environ: Mapping[str, str]) -> int:
    if raw := environ.get(ENV_PR_NUMBER):
        return _parse_int(raw, ENV_PR_NUMBER)
    if event_path := environ.get(ENV_EVENT_PATH):
        return read_event_pr_number(event_path)
    raise ConfigError(f"{ENV_PR_NUMBER} is not set and no {ENV_EVENT_PATH} payload is available.")


def _required(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key)
    if not value:
        raise ConfigError(f"{key} is not set.")
    return value


def _parse_int(raw: str, key: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}.") from exc


def _parse_float(raw: str | None, key: str, default: float) -> float:
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got {raw!r}.") from exc
