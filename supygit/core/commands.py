"""
The /git chat command.

Usage: /git commit [message] | /git rollback [steps] | /git branch [action [name]]
"""

from __future__ import annotations

import re

from supygit.core.errors import UsageError
from supygit.core.git import GitOperations
from supygit.models.requests import (
    BRANCH_ACTIONS,
    BranchAction,
    BranchRequest,
    CommitRequest,
    RollbackRequest,
)
from supygit.models.result import CommandResult

USAGE = "Usage: /git <commit|rollback|branch> [options]"

_STEPS_PATTERN = re.compile(r"^[0-9]+$")

HELP = """\
# Git Operations Command

## Usage

/git <action> [options]

## Available Actions

- **commit** - Commit changes in the source directory
- **rollback** - Roll back to a previous commit state
- **branch** - Manage git branches

## Detailed Usage

### /git commit [message]

Commits all changes in the source directory to git. If no message is provided,
an AI-generated commit message will be used.

**Examples:**
/git commit
/git commit "Fix authentication bug"

### /git rollback [steps]

Rolls back to a previous commit state.
- **[steps]** - Number of commits to roll back (default: 1)

**Examples:**
/git rollback
/git rollback 3

### /git branch [action] [branchName]

Manages git branches. If no action is specified, shows the current branch and
lists local branches.

**Actions:**
- **list** - List all branches (local and remote)
- **current** - Show current branch
- **create** - Create and switch to a new branch
- **switch** - Switch to an existing branch
- **delete** - Delete a branch

**Examples:**
/git branch
/git branch list
/git branch current
/git branch create feature-xyz
/git branch switch main
/git branch delete feature-xyz

## Notes

- Commit operations automatically stage all changes (git add .)
- Rollback operations fail if there are uncommitted changes
- All commits use the configured bot identity as the committer
"""


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


class GitCommand:
    """Parses /git command lines and runs them against GitOperations."""

    name = "git"
    description = "/git - Git operations (commit, rollback, branch)."
    help = HELP

    def __init__(self, operations: GitOperations):
        self.operations = operations

    def parse(self, line: str) -> CommitRequest | RollbackRequest | BranchRequest:
        """
        Turn a command line into a request.

        Raises:
            UsageError: On empty input, unknown actions or invalid arguments
        """
        args = line.split() if line else []
        if args and args[0].lower() == f"/{self.name}":
            args = args[1:]
        if not args:
            raise UsageError(USAGE)

        action = args[0].lower()

        if action == "commit":
            message = _strip_quotes(" ".join(args[1:])) if len(args) > 1 else None
            return CommitRequest(message=message or None)

        if action == "rollback":
            steps = 1
            if len(args) > 1:
                token = args[1]
                if not _STEPS_PATTERN.match(token) or int(token) < 1:
                    raise UsageError(
                        f'Invalid rollback position: "{token}". Must be a positive integer.'
                    )
                steps = int(token)
            return RollbackRequest(steps=steps)

        if action == "branch":
            if len(args) == 1:
                return BranchRequest()
            keyword = args[1].lower()
            if keyword not in BRANCH_ACTIONS:
                raise UsageError(
                    f'Invalid branch action: "{args[1]}". '
                    f"Valid actions are: {', '.join(BRANCH_ACTIONS)}"
                )
            name = args[2] if len(args) > 2 else None
            return BranchRequest(action=BranchAction(keyword), name=name)

        raise UsageError(
            f"Unknown git action: \"{args[0]}\". Use 'commit', 'rollback', or 'branch'."
        )

    def execute(self, line: str) -> CommandResult:
        try:
            request = self.parse(line)
        except UsageError as e:
            return CommandResult.fail(e.message, error_type=e.error_type)
        return self.operations.execute(request)
