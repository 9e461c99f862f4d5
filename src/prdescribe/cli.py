from __future__ import annotations

import dataclasses
import os
import sys

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from .annotations import Reporter
from .client import GitHubClient
from .completion import CompletionClient
from .config import ALLOWED_MODELS, ENV_LABEL, ENV_OPENAI_MODEL, ENV_TIMEOUT, Config
from .describe import RunOutcome, describe_pull_request
from .errors import PrDescribeError

_stderr = Console(stderr=True)


@click.group()
def cli() -> None:
    """prdescribe: summarize a labelled pull request and comment the summary."""


@cli.command()
@click.option(
    "--label",
    default=None,
    help=f"Label that enables the summary. Overrides {ENV_LABEL}.",
)
@click.option(
    "--model",
    type=click.Choice(ALLOWED_MODELS),
    default=None,
    help=f"Completion model. Overrides {ENV_OPENAI_MODEL}.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help=f"Per-request timeout in seconds. Overrides {ENV_TIMEOUT}.",
)
def run(label: str | None, model: str | None, timeout: float | None) -> None:
    """Post an AI summary of the pull request's changes if it carries the label."""
    load_dotenv()
    reporter = Reporter()

    environ = dict(os.environ)
    if model is not None:
        environ[ENV_OPENAI_MODEL] = model
    if timeout is not None:
        environ[ENV_TIMEOUT] = str(timeout)

    try:
        config = Config.from_env(environ)
        if label is not None:
            # An explicit --label "" is rejected by Config rather than replaced by the default.
            config = dataclasses.replace(config, label=label)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=_stderr,
            transient=True,
        ) as progress:
            progress.add_task(f"Describing PR #{config.pr_number} in {config.repo_full_name}…", total=None)
            with GitHubClient(
                config.github_token, config.github_api_url, config.timeout
            ) as github, CompletionClient(
                config.openai_api_key, config.model, config.openai_api_url, config.timeout
            ) as completer:
                outcome = describe_pull_request(config, github, completer, reporter)
    except PrDescribeError as exc:
        reporter.error(str(exc))
        sys.exit(1)

    if outcome is RunOutcome.SKIPPED:
        _stderr.print(f"[yellow]Skipped:[/yellow] label {config.label!r} not present.")
