"""
Plugin wiring.

GitPlugin builds the collaborators for one repository from PluginConfig and
exposes the three integration points a host agent needs: the /git command,
the git tools and the after-testing hook. Any collaborator can be injected
instead of built, which is how tests substitute fakes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

from supygit import __version__
from supygit.core.chat import ChatHistory
from supygit.core.commands import GitCommand
from supygit.core.commit_message import CommitMessageGenerator
from supygit.core.git import GitOperations
from supygit.core.hooks import AutoCommitHook
from supygit.core.llm import LLMClient
from supygit.core.output import AgentOutput
from supygit.core.process import CommandRunner
from supygit.core.suites import CommandSuite, Suite
from supygit.core.tools import execute_git_tool, get_git_tools
from supygit.models.config import PluginConfig
from supygit.models.result import CommandResult

logger = logging.getLogger(__name__)


class GitPlugin:
    """Git commit, rollback and branch tools for a coding agent."""

    name = "supygit"
    version = __version__
    description = "Git commit, rollback and branch management for coding agents"

    def __init__(
        self,
        config: PluginConfig | None = None,
        working_dir: str | Path = ".",
        *,
        runner: CommandRunner | None = None,
        llm: LLMClient | None = None,
        chat: ChatHistory | None = None,
        output: AgentOutput | None = None,
        suites: list[Suite] | None = None,
    ):
        self.config = config or PluginConfig()

        self.runner = runner or CommandRunner(working_dir, timeout=self.config.git_timeout)
        self.chat = chat or ChatHistory()
        self.output = output or AgentOutput()
        self.llm = llm or LLMClient(
            model=self.config.model.provider,
            temperature=self.config.model.temperature,
            max_tokens=self.config.model.max_tokens,
            max_retries=self.config.model.max_retries,
            retry_delay=self.config.model.retry_delay,
            retry_backoff=self.config.model.retry_backoff,
            fallback_models=self.config.model.fallback,
        )

        if suites is None:
            suites = [
                CommandSuite(suite.name, suite.command, self.runner, timeout=suite.timeout)
                for suite in self.config.test_suites
            ]
        self.suites: list[Suite] = suites

        self.messages = CommitMessageGenerator(
            llm=self.llm,
            chat=self.chat,
            output=self.output,
            default_message=self.config.default_commit_message,
            prompt=self.config.commit_prompt,
        )
        self.operations = GitOperations(
            runner=self.runner,
            output=self.output,
            messages=self.messages,
            committer_name=self.config.committer_name,
            committer_email=self.config.committer_email,
        )
        self.command = GitCommand(self.operations)
        self.auto_commit = AutoCommitHook(
            operations=self.operations,
            runner=self.runner,
            output=self.output,
            suites=lambda: list(self.suites),
        )

    def tools(self) -> list[dict[str, Any]]:
        """OpenAI-format tool definitions to register with the chat service."""
        return get_git_tools()

    def execute_tool(self, tool_name: str, arguments: dict[str, Any] | str | None) -> CommandResult:
        return execute_git_tool(self.operations, tool_name, arguments)

    def hooks(self) -> dict[str, Callable[[], None]]:
        """Lifecycle callbacks keyed by event name."""
        return {"after_testing": self.auto_commit.after_testing}

    def refresh_dirty(self) -> bool:
        """
        Set the dirty flag from ``git status --porcelain``.

        For hosts that write files outside of CommandRunner.write_file(),
        e.g. a fresh CLI process.
        """
        status = self.runner.run(["git", "status", "--porcelain"])
        dirty = any(line.strip() for line in status.stdout.split("\n"))
        self.runner.set_dirty(dirty)
        return dirty

    def run_suites(self) -> dict[str, bool]:
        """
        Run every command-backed suite.

        Returns:
            Suite name -> passed
        """
        results: dict[str, bool] = {}
        for suite in self.suites:
            if isinstance(suite, CommandSuite):
                self.output.info_line(f"Running test suite {suite.name}: {' '.join(suite.command)}")
                results[suite.name] = suite.run()
            else:
                results[suite.name] = suite.all_passed()
        return results
