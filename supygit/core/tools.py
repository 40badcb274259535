"""
Git tools for LLM tool calling.

Exposes commit, rollback and branch as OpenAI-format function tools and
executes tool calls against GitOperations.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError

from supygit.core.git import GitOperations
from supygit.models.requests import BRANCH_ACTIONS, parse_request
from supygit.models.result import USAGE, CommandResult

logger = logging.getLogger(__name__)

# Tool name -> request kind
_TOOL_KINDS = {
    "git__commit": "commit",
    "git__rollback": "rollback",
    "git__branch": "branch",
}


def get_git_tools() -> list[dict[str, Any]]:
    """
    Get tool schemas for the git operations.

    Returns:
        List of OpenAI-format tool definitions
    """
    return [
        {
            "type": "function",
            "function": {
                "name": "git__commit",
                "description": "Commits changes in the source directory to git.",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "message": {
                            "type": "string",
                            "description": (
                                "Optional commit message. If not provided, a message "
                                "will be generated based on the chat context."
                            ),
                        }
                    },
                },
            },
        },
        {
            "type": "function",
            "function": {
                "name": "git__rollback",
                "description": (
                    "Rolls back to a previous git commit. "
                    "Fails if there are uncommitted changes."
                ),
                "parameters": {
                    "type": "object",
                    "properties": {
                        "commit": {
                            "type": "string",
                            "description": "The commit hash to rollback to",
                        },
                        "steps": {
                            "type": "integer",
                            "minimum": 1,
                            "description": "Number of commits to roll back (default 1)",
                        },
                    },
                },
            },
        },
        {
            "type": "function",
            "function": {
                "name": "git__branch",
                "description": "Manages git branches - list, create, switch, or delete branches.",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "action": {
                            "type": "string",
                            "enum": list(BRANCH_ACTIONS),
                            "description": "The branch action to perform",
                        },
                        "branchName": {
                            "type": "string",
                            "description": (
                                "The name of the branch (required for create, "
                                "switch, and delete actions)"
                            ),
                        },
                    },
                    "required": ["action"],
                },
            },
        },
    ]


def is_git_tool(tool_name: str) -> bool:
    """Check if a tool name is one of the git tools."""
    return tool_name in _TOOL_KINDS


def execute_git_tool(
    operations: GitOperations,
    tool_name: str,
    arguments: dict[str, Any] | str | None,
) -> CommandResult:
    """
    Execute a git tool call.

    Args:
        operations: Operators for the target repository
        tool_name: Tool name from the LLM tool call
        arguments: Parsed arguments dict, or the raw JSON string

    Returns:
        CommandResult; bad names or arguments come back as usage failures
    """
    kind = _TOOL_KINDS.get(tool_name)
    if kind is None:
        return CommandResult.fail(f"Unknown git tool: {tool_name}", error_type=USAGE)

    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments) if arguments.strip() else {}
        except json.JSONDecodeError as e:
            return CommandResult.fail(f"Invalid JSON arguments for {tool_name}: {e}", error_type=USAGE)
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        return CommandResult.fail(f"Arguments for {tool_name} must be an object", error_type=USAGE)

    if tool_name == "git__branch" and "action" not in arguments:
        return CommandResult.fail("Missing required argument: action", error_type=USAGE)

    try:
        request = parse_request({**arguments, "kind": kind})
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'][1:])}: {err['msg']}" for err in e.errors()
        )
        return CommandResult.fail(f"Invalid arguments for {tool_name}: {errors}", error_type=USAGE)

    logger.debug("Executing %s with %s", tool_name, arguments)
    return operations.execute(request)
