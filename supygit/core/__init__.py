"""Core module for supygit."""

from supygit.core.chat import ChatHistory, ChatMessage
from supygit.core.commands import GitCommand
from supygit.core.commit_message import CommitMessageGenerator
from supygit.core.errors import (
    AutoCommitError,
    GitPluginError,
    PreconditionError,
    SubprocessError,
    UsageError,
)
from supygit.core.git import GitOperations
from supygit.core.hooks import AutoCommitHook
from supygit.core.llm import LLMClient, LLMError
from supygit.core.output import AgentOutput
from supygit.core.plugin import GitPlugin
from supygit.core.process import CommandRunner, ProcessOutcome
from supygit.core.suites import CommandSuite, Suite
from supygit.core.tools import execute_git_tool, get_git_tools, is_git_tool

__all__ = [
    "AgentOutput",
    "AutoCommitError",
    "AutoCommitHook",
    "ChatHistory",
    "ChatMessage",
    "CommandRunner",
    "CommandSuite",
    "CommitMessageGenerator",
    "GitCommand",
    "GitOperations",
    "GitPlugin",
    "GitPluginError",
    "LLMClient",
    "LLMError",
    "PreconditionError",
    "ProcessOutcome",
    "SubprocessError",
    "Suite",
    "UsageError",
    "execute_git_tool",
    "get_git_tools",
    "is_git_tool",
]
