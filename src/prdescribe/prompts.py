from __future__ import annotations

from collections.abc import Iterable

from .models import ChangedFile

COMMENT_BANNER = "**PR Auto Describe:**\n\n"

PROMPT_INTRO = (
    "We've made several updates in this pull request and would like to generate a list of changes. "
    "The purpose is to summarize the pull request for easy understanding. "
    "We are not interested in code reviews at this time.\n\n"
)

PROMPT_INSTRUCTIONS = (
    "Please generate a concise list of changes, categorizing each by its type "
    "(e.g., 'Refactor', 'Bug Fix', 'Optimization').\n\n"
    "Structure your list of changes like this:\n"
    "[Short description of the whole changes]\n\n"
    "1. **Type**: Refactor\n   **Description**: [Short description of the change]\n"
    "2. **Type**: Optimization\n   **Description**: [Short description of the change]\n"
    "..."
)


def format_file_block(changed_file: ChangedFile) -> str:
    patch = changed_file.patch or ""
    return f"File: {changed_file.filename}\nChanges:\n{patch}\n"


def build_diff_bundle(files: Iterable[ChangedFile]) -> str:
    """Concatenate every changed file's block, in the order given."""
    return "".join(format_file_block(f) for f in files)


def generate_prompt(diff_bundle: str) -> str:
    return (
        PROMPT_INTRO
        + "Below are the changes in this pull request:\n"
        + "```\n"
        + diff_bundle
        + "```\n\n"
        + PROMPT_INSTRUCTIONS
    )


def format_comment(summary: str) -> str:
    return COMMENT_BANNER + summary
