"""
Pytest fixtures for supygit tests.
"""

import subprocess
from unittest.mock import MagicMock

import pytest

from supygit.core.chat import ChatHistory
from supygit.core.errors import SubprocessError
from supygit.core.llm import LLMClient
from supygit.core.output import AgentOutput
from supygit.core.plugin import GitPlugin
from supygit.core.process import CommandRunner, ProcessOutcome
from supygit.models.config import PluginConfig

COMMIT_PREFIX = "git -c user.name="


class FakeRunner(CommandRunner):
    """
    CommandRunner that records argv instead of running anything.

    ``outputs`` and ``failures`` are keyed by a prefix of the space-joined
    argv; the longest matching prefix wins.
    """

    def __init__(self, outputs=None, failures=None):
        super().__init__(".")
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []
        self.outputs: dict[str, str] = outputs or {}
        self.failures: dict[str, str] = failures or {}

    def _lookup(self, table, joined):
        matches = [key for key in table if joined.startswith(key)]
        if not matches:
            return None
        return table[max(matches, key=len)]

    def run(self, argv, check=True, timeout=None):
        self.calls.append(list(argv))
        self.timeouts.append(timeout)
        joined = " ".join(argv)

        stderr = self._lookup(self.failures, joined)
        if stderr is not None:
            outcome = ProcessOutcome(argv=list(argv), exit_code=1, stderr=stderr)
        else:
            outcome = ProcessOutcome(
                argv=list(argv), exit_code=0, stdout=self._lookup(self.outputs, joined) or ""
            )

        if check and not outcome.ok:
            raise SubprocessError(
                outcome.error_message, argv=outcome.argv, exit_code=1, stderr=outcome.stderr
            )
        return outcome

    def commit_calls(self):
        return [c for c in self.calls if " ".join(c).startswith(COMMIT_PREFIX)]


class FakeSuite:
    """Suite with a fixed result."""

    def __init__(self, name, passed):
        self.name = name
        self.passed = passed

    def all_passed(self):
        return self.passed


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def output():
    """Progress sink that records lines without printing."""
    return AgentOutput(quiet=True)


@pytest.fixture
def chat():
    return ChatHistory()


@pytest.fixture
def llm():
    """LLM client mock that returns a fixed commit message."""
    client = MagicMock(spec=LLMClient)
    client.complete_text.return_value = "Add parser error recovery\n"
    return client


@pytest.fixture
def config():
    return PluginConfig()


@pytest.fixture
def plugin(config, runner, llm, chat, output):
    return GitPlugin(config, runner=runner, llm=llm, chat=chat, output=output, suites=[])


@pytest.fixture
def ops(plugin):
    return plugin.operations


def _git(cwd, *args):
    return subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True)


@pytest.fixture
def git_repo(tmp_path):
    """Create a real Git repository on branch main with an initial commit."""
    _git(tmp_path, "init")
    _git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(tmp_path, "config", "user.email", "test@test.com")
    _git(tmp_path, "config", "user.name", "Test")
    (tmp_path / "README.md").write_text("# Test\n")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-m", "Initial commit")
    return tmp_path


@pytest.fixture
def git():
    """Run git in a directory and return stripped stdout."""

    def run(cwd, *args):
        return _git(cwd, *args).stdout.strip()

    return run


@pytest.fixture
def make_runner():
    """Factory for FakeRunner with scripted outputs and failures."""
    return FakeRunner


@pytest.fixture
def make_suite():
    return FakeSuite


@pytest.fixture
def make_plugin(config, llm, chat, output):
    """Factory for a GitPlugin around a given runner."""

    def build(runner, suites=None, **kwargs):
        kwargs.setdefault("llm", llm)
        kwargs.setdefault("chat", chat)
        kwargs.setdefault("output", output)
        return GitPlugin(config, runner=runner, suites=suites or [], **kwargs)

    return build
