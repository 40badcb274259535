"""
Tests for the branch operator.
"""

import pytest

from supygit.models.requests import BranchAction


class TestBranchNameRequired:
    @pytest.mark.parametrize("action", ["create", "switch", "delete"])
    def test_missing_name_fails_without_git(self, ops, runner, action):
        result = ops.branch(action)

        assert result.ok is False
        assert result.error_type == "usage"
        assert f"required for {action}" in result.error
        assert runner.calls == []

    def test_create_with_name(self, ops, runner):
        result = ops.branch(BranchAction.CREATE, "feature-x")

        assert result.ok is True
        assert runner.calls == [["git", "checkout", "-b", "feature-x"]]
        assert result.data == "Branch 'feature-x' created and checked out"


class TestBranchActions:
    def test_switch(self, ops, runner):
        result = ops.branch(BranchAction.SWITCH, "main")

        assert runner.calls == [["git", "checkout", "main"]]
        assert "main" in result.data

    def test_delete(self, ops, runner):
        result = ops.branch(BranchAction.DELETE, "old")

        assert runner.calls == [["git", "branch", "-d", "old"]]
        assert result.data == "Branch 'old' deleted"

    def test_current(self, make_plugin, make_runner):
        runner = make_runner(outputs={"git branch --show-current": "feature-x\n"})

        result = make_plugin(runner).operations.branch(BranchAction.CURRENT)

        assert runner.calls == [["git", "branch", "--show-current"]]
        assert result.data == "Current branch: feature-x"

    def test_current_ignores_name(self, ops, runner):
        ops.branch(BranchAction.CURRENT, "ignored")
        assert runner.calls == [["git", "branch", "--show-current"]]

    def test_list_all(self, make_plugin, make_runner, output):
        runner = make_runner(
            outputs={"git branch -a": "* main\n  dev\n\n  remotes/origin/main\n"}
        )

        result = make_plugin(runner).operations.branch(BranchAction.LIST)

        assert runner.calls == [["git", "branch", "-a"]]
        assert result.data == "Branches:\n  * main\n    dev\n    remotes/origin/main"
        assert "[git/branch]     dev" in output.messages("info")

    def test_default_shows_current_and_local(self, make_plugin, make_runner):
        runner = make_runner(
            outputs={
                "git branch --show-current": "main\n",
                "git branch": "* main\n  dev\n",
            }
        )

        result = make_plugin(runner).operations.branch()

        assert runner.calls == [["git", "branch", "--show-current"], ["git", "branch"]]
        assert result.data == "Current branch: main\nLocal branches:\n  * main\n    dev"

    def test_string_action_is_case_insensitive(self, ops, runner):
        ops.branch("SWITCH", "main")
        assert runner.calls == [["git", "checkout", "main"]]

    def test_unknown_string_action(self, ops, runner):
        result = ops.branch("rename", "x")

        assert result.ok is False
        assert result.error_type == "usage"
        assert "list, current, create, switch, delete" in result.error
        assert runner.calls == []


class TestBranchFailure:
    def test_checkout_error_is_passed_through(self, make_plugin, make_runner):
        runner = make_runner(
            failures={"git checkout": "error: pathspec 'nope' did not match any file(s) known to git"}
        )

        result = make_plugin(runner).operations.branch(BranchAction.SWITCH, "nope")

        assert result.ok is False
        assert result.error_type == "subprocess"
        assert "pathspec 'nope'" in result.error


class TestBranchNameValidation:
    @pytest.mark.parametrize("action", ["create", "switch", "delete"])
    def test_option_like_name_rejected(self, ops, runner, action):
        result = ops.branch(action, "--orphan")

        assert result.ok is False
        assert result.error_type == "usage"
        assert '"--orphan"' in result.error
        assert runner.calls == []

    def test_name_with_inner_dash_allowed(self, ops, runner):
        assert ops.branch("create", "fix-1").ok is True
        assert runner.calls == [["git", "checkout", "-b", "fix-1"]]
