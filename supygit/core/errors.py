"""
Exceptions raised inside supygit.

Operators catch GitPluginError and turn it into a failed CommandResult;
only AutoCommitError escapes to the caller of the lifecycle hook.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from supygit.models.result import PRECONDITION, SUBPROCESS, USAGE

if TYPE_CHECKING:
    from supygit.models.result import CommandResult


class GitPluginError(Exception):
    """Base class for errors that map onto a failed CommandResult."""

    error_type: str | None = None

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UsageError(GitPluginError):
    """Malformed or incomplete command input. Raised before any git call."""

    error_type = USAGE


class PreconditionError(GitPluginError):
    """The repository is not in a state the operation accepts."""

    error_type = PRECONDITION


class SubprocessError(GitPluginError):
    """A git invocation exited non-zero, timed out or could not be started."""

    error_type = SUBPROCESS

    def __init__(
        self,
        message: str,
        argv: list[str] | None = None,
        exit_code: int | None = None,
        stderr: str = "",
    ):
        self.argv = argv or []
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message)


class AutoCommitError(Exception):
    """The after-testing hook tried to commit and the commit failed."""

    def __init__(self, result: CommandResult):
        self.result = result
        super().__init__(result.error or "Automatic commit failed")
