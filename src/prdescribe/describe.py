from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Protocol

from .annotations import Reporter
from .config import Config
from .models import ChangedFile, Label, PublishResult, PullRequestRef
from .prompts import build_diff_bundle, format_comment, generate_prompt


class PullRequestSource(Protocol):
    def fetch_labels(self, pr: PullRequestRef) -> list[Label]: ...

    def fetch_changed_files(self, pr: PullRequestRef) -> list[ChangedFile]: ...

    def post_comment(self, pr: PullRequestRef, body: str) -> PublishResult: ...


class Completer(Protocol):
    def complete(self, prompt: str) -> str: ...


class RunOutcome(enum.Enum):
    SKIPPED = "skipped"
    DONE = "done"


def has_label(labels: Iterable[Label] | None, target: str) -> bool:
    if not labels:
        return False
    return any(label.name == target for label in labels)


def collect_diff(github: PullRequestSource, pr: PullRequestRef) -> str:
    return build_diff_bundle(github.fetch_changed_files(pr))


def summarize(completer: Completer, diff_bundle: str) -> str:
    return completer.complete(generate_prompt(diff_bundle))


def publish(
    github: PullRequestSource,
    pr: PullRequestRef,
    summary: str,
    reporter: Reporter,
) -> PublishResult:
    result = github.post_comment(pr, format_comment(summary))
    if result.ok:
        reporter.info(f"Successfully posted comment to PR {pr.number}.")
    else:
        reporter.error(f"Failed to post comment to PR {pr.number}. Status code: {result.status_code}")
    return result


def describe_pull_request(
    config: Config,
    github: PullRequestSource,
    completer: Completer,
    reporter: Reporter,
) -> RunOutcome:
    """Gate on the label, then collect, summarize and publish.

    Fatal failures propagate as PrDescribeError; a rejected comment post is
    reported but does not fail the run.
    """
    pr = config.pull_request

    if not has_label(github.fetch_labels(pr), config.label):
        reporter.debug(f"PR {pr.number} is not labelled {config.label!r}; nothing to do.")
        return RunOutcome.SKIPPED

    diff_bundle = collect_diff(github, pr)
    summary = summarize(completer, diff_bundle)
    publish(github, pr, summary, reporter)
    return RunOutcome.DONE
