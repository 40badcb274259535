"""
Lifecycle hooks.

After a test run, dirty changes are committed automatically when every
registered suite passed.
"""

from __future__ import annotations

import logging
from typing import Callable

from supygit.core.errors import AutoCommitError
from supygit.core.git import GitOperations
from supygit.core.output import AgentOutput
from supygit.core.process import CommandRunner
from supygit.core.suites import Suite

logger = logging.getLogger(__name__)

DESCRIPTION = "Automatically commit changes to the source directory to git"


class AutoCommitHook:
    """Commits the working tree after a passing test run."""

    description = DESCRIPTION

    def __init__(
        self,
        operations: GitOperations,
        runner: CommandRunner,
        output: AgentOutput,
        suites: Callable[[], list[Suite]],
    ):
        self.operations = operations
        self.runner = runner
        self.output = output
        self.suites = suites

    def after_testing(self) -> None:
        """
        Commit with a generated message if the tree is dirty and tests passed.

        Raises:
            AutoCommitError: The commit was attempted and failed
        """
        if not self.runner.dirty:
            logger.debug("Working tree clean, nothing to commit")
            return

        for suite in self.suites():
            if not suite.all_passed():
                self.output.error_line("Not committing changes, due to tests not passing")
                return

        result = self.operations.commit(None)
        if not result.ok:
            self.output.error_line(f"Automatic commit failed: {result.error}")
            raise AutoCommitError(result)
