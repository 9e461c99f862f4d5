from __future__ import annotations

from rich.console import Console


def escape_data(message: str) -> str:
    """Escape a message so multi-line text stays inside one workflow command."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Reporter:
    """Writes GitHub workflow-command lines (``::error::`` etc.) for the runner to pick up."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(soft_wrap=True, highlight=False, emoji=False)

    def _emit(self, severity: str, message: str) -> None:
        self._console.print(f"::{severity}::{escape_data(message)}", markup=False, emoji=False, highlight=False)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def debug(self, message: str) -> None:
        self._emit("debug", message)
