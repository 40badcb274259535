"""
Test suites consulted before automatic commits.
"""

from __future__ import annotations

import logging
from typing import Protocol

from supygit.core.errors import SubprocessError
from supygit.core.process import CommandRunner, ProcessOutcome

logger = logging.getLogger(__name__)


class Suite(Protocol):
    """Anything that can report whether its tests passed."""

    name: str

    def all_passed(self) -> bool: ...


class CommandSuite:
    """
    A suite backed by a shell command, e.g. ``["pytest", "-q"]``.

    ``timeout`` overrides the runner timeout, which is sized for git calls.

    Reports failure until it has been run and exited zero.
    """

    def __init__(
        self,
        name: str,
        command: list[str],
        runner: CommandRunner,
        timeout: float | None = None,
    ):
        self.name = name
        self.command = command
        self.runner = runner
        self.timeout = timeout
        self.last_outcome: ProcessOutcome | None = None

    def run(self) -> bool:
        try:
            self.last_outcome = self.runner.run(self.command, check=False, timeout=self.timeout)
        except SubprocessError as e:
            logger.warning("Test suite %s could not run: %s", self.name, e)
            self.last_outcome = ProcessOutcome(argv=list(self.command), exit_code=-1, stderr=str(e))
        return self.all_passed()

    def all_passed(self) -> bool:
        return self.last_outcome is not None and self.last_outcome.ok
