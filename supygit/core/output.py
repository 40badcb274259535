"""
Progress output for git operations.

Operators report what they are doing line by line. Lines are printed to a
rich console (stderr by default, so the final result on stdout stays
separate) and kept in memory for callers that want to inspect them.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Literal

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

Level = Literal["info", "warning", "error"]

# Recorded lines kept per sink; older lines are dropped
MAX_RECORDED_LINES = 500

_STYLES: dict[str, str] = {
    "info": "grey62",
    "warning": "yellow",
    "error": "red",
}


class AgentOutput:
    """Line-oriented progress sink."""

    def __init__(
        self,
        console: Console | None = None,
        quiet: bool = False,
        max_lines: int = MAX_RECORDED_LINES,
    ):
        self.console = console or Console(stderr=True)
        self.quiet = quiet
        self.lines: deque[tuple[Level, str]] = deque(maxlen=max_lines)

    def _emit(self, level: Level, text: str) -> None:
        self.lines.append((level, text))
        logger.debug("[%s] %s", level, text)
        if not self.quiet:
            style = _STYLES[level]
            self.console.print(f"[{style}]{escape(text)}[/{style}]")

    def info_line(self, text: str) -> None:
        self._emit("info", text)

    def warning_line(self, text: str) -> None:
        self._emit("warning", text)

    def error_line(self, text: str) -> None:
        self._emit("error", text)

    def messages(self, level: Level | None = None) -> list[str]:
        """Recorded line texts, optionally filtered by level."""
        return [text for lvl, text in self.lines if level is None or lvl == level]
