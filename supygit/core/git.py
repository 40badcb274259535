"""
Git operations: commit, rollback and branch management.

Each operation runs a fixed sequence of git invocations through the
CommandRunner, reports progress lines, and returns a CommandResult.
Validation and git failures come back as failed results, never as
exceptions.
"""

from __future__ import annotations

import logging

from supygit.core.commit_message import CommitMessageGenerator
from supygit.core.errors import GitPluginError, PreconditionError, SubprocessError, UsageError
from supygit.core.output import AgentOutput
from supygit.core.process import CommandRunner
from supygit.models.requests import (
    BRANCH_ACTIONS,
    BranchAction,
    BranchRequest,
    CommitRequest,
    RollbackRequest,
)
from supygit.models.result import CommandResult

logger = logging.getLogger(__name__)


def _non_blank_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip()]


def _check_ref(value: str, what: str) -> None:
    """Refuse values git would parse as an option."""
    if value.startswith("-"):
        raise UsageError(f'Invalid {what}: "{value}". Must not start with "-".')


class GitOperations:
    """Git operators bound to one repository."""

    def __init__(
        self,
        runner: CommandRunner,
        output: AgentOutput,
        messages: CommitMessageGenerator,
        committer_name: str,
        committer_email: str,
    ):
        self.runner = runner
        self.output = output
        self.messages = messages
        self.committer_name = committer_name
        self.committer_email = committer_email

    def execute(self, request: CommitRequest | RollbackRequest | BranchRequest) -> CommandResult:
        """Route a validated request to its operator."""
        if isinstance(request, CommitRequest):
            return self.commit(request.message)
        if isinstance(request, RollbackRequest):
            return self.rollback(commit=request.commit, steps=request.steps)
        if isinstance(request, BranchRequest):
            return self.branch(request.action, request.name)
        return CommandResult.fail(f"Unsupported request: {request!r}", error_type="usage")

    # =========================================================================
    # Commit
    # =========================================================================

    def commit(self, message: str | None = None) -> CommandResult:
        """
        Stage everything and commit it under the bot identity.

        Staging is not undone when the commit itself fails.
        """
        tag = "git/commit"
        try:
            self.runner.run(["git", "add", "."])

            final_message = self.messages.resolve(message)

            self.runner.run(
                [
                    "git",
                    "-c",
                    f"user.name={self.committer_name}",
                    "-c",
                    f"user.email={self.committer_email}",
                    "commit",
                    "-m",
                    final_message,
                ]
            )
        except GitPluginError as e:
            return self._failure(tag, e)

        self.runner.set_dirty(False)
        self.output.info_line(f"[{tag}] Changes committed to git.")

        summary = (final_message.strip().splitlines() or [""])[0]
        return CommandResult.success(f"Changes successfully committed to git: {summary}")

    # =========================================================================
    # Rollback
    # =========================================================================

    def rollback(self, commit: str | None = None, steps: int | None = None) -> CommandResult:
        """
        Hard-reset to ``commit``, or ``steps`` commits back (default 1).

        Refuses to run over uncommitted changes.
        """
        tag = "git/rollback"
        try:
            if not commit and steps is not None and steps < 1:
                raise UsageError(f"Invalid rollback steps: {steps}. Must be a positive integer.")
            if commit:
                _check_ref(commit, "commit")

            status = self.runner.run(["git", "status", "--porcelain"])
            if _non_blank_lines(status.stdout):
                raise PreconditionError("Rollback aborted: uncommitted changes detected")

            if commit:
                self.output.info_line(f"[{tag}] Rolling back to commit {commit}...")
                target = commit
                summary = f"Rolled back to commit {commit}"
            else:
                count = steps or 1
                self.output.info_line(f"[{tag}] Rolling back {count} commit(s)...")
                target = f"HEAD~{count}"
                summary = f"Rolled back {count} commit(s)"

            try:
                self.runner.run(["git", "reset", "--hard", target])
            except SubprocessError as e:
                raise SubprocessError(
                    f"Rollback failed: {e.message}",
                    argv=e.argv,
                    exit_code=e.exit_code,
                    stderr=e.stderr,
                ) from e
        except GitPluginError as e:
            return self._failure(tag, e)

        self.runner.set_dirty(False)
        self.output.info_line(f"[{tag}] Rollback completed successfully.")
        return CommandResult.success(summary)

    # =========================================================================
    # Branch
    # =========================================================================

    def branch(
        self, action: BranchAction | str | None = None, name: str | None = None
    ) -> CommandResult:
        """
        Manage branches.

        With no action, shows the current branch followed by the local
        branch list.
        """
        tag = "git/branch"
        try:
            action = self._coerce_action(action)

            if action is not None and action.needs_name:
                if not name:
                    raise UsageError(f"Branch name is required for {action.value} action")
                _check_ref(name, "branch name")

            if action is BranchAction.LIST:
                self.output.info_line(f"[{tag}] Listing all branches...")
                stdout = self.runner.run(["git", "branch", "-a"]).stdout
                return CommandResult.success(self._format_branches("Branches:", stdout))

            if action is BranchAction.CURRENT:
                current = self.runner.run(["git", "branch", "--show-current"]).stdout.strip()
                self.output.info_line(f"[{tag}] Current branch: {current}")
                return CommandResult.success(f"Current branch: {current}")

            if action is BranchAction.CREATE:
                self.output.info_line(f"[{tag}] Creating new branch: {name}...")
                self.runner.run(["git", "checkout", "-b", name])
                self.output.info_line(f"[{tag}] Successfully created and switched to branch: {name}")
                return CommandResult.success(f"Branch '{name}' created and checked out")

            if action is BranchAction.SWITCH:
                self.output.info_line(f"[{tag}] Switching to branch: {name}...")
                self.runner.run(["git", "checkout", name])
                self.output.info_line(f"[{tag}] Successfully switched to branch: {name}")
                return CommandResult.success(f"Switched to branch '{name}'")

            if action is BranchAction.DELETE:
                self.output.info_line(f"[{tag}] Deleting branch: {name}...")
                self.runner.run(["git", "branch", "-d", name])
                self.output.info_line(f"[{tag}] Successfully deleted branch: {name}")
                return CommandResult.success(f"Branch '{name}' deleted")

            current = self.runner.run(["git", "branch", "--show-current"]).stdout.strip()
            local = self.runner.run(["git", "branch"]).stdout
            self.output.info_line(f"[{tag}] Current branch: {current}")
            listing = self._format_branches("Local branches:", local)
            return CommandResult.success(f"Current branch: {current}\n{listing}")
        except GitPluginError as e:
            return self._failure(tag, e)

    def _coerce_action(self, action: BranchAction | str | None) -> BranchAction | None:
        if action is None or isinstance(action, BranchAction):
            return action
        try:
            return BranchAction(action.strip().lower())
        except ValueError:
            raise UsageError(
                f'Invalid branch action: "{action}". '
                f"Valid actions are: {', '.join(BRANCH_ACTIONS)}"
            ) from None

    def _format_branches(self, heading: str, stdout: str) -> str:
        tag = "git/branch"
        lines = [heading]
        self.output.info_line(f"[{tag}] {heading}")
        for line in _non_blank_lines(stdout):
            self.output.info_line(f"[{tag}]   {line}")
            lines.append(f"  {line}")
        return "\n".join(lines)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _failure(self, tag: str, error: GitPluginError) -> CommandResult:
        logger.debug("%s failed: %s", tag, error.message)
        return CommandResult.fail(f"[{tag}] {error.message}", error_type=error.error_type)
