"""
Tests for the rollback operator.
"""

import pytest


def _resets(runner):
    return [c for c in runner.calls if c[:2] == ["git", "reset"]]


class TestRollbackPrecondition:
    def test_dirty_tree_blocks_reset(self, make_plugin, make_runner):
        runner = make_runner(outputs={"git status --porcelain": " M src/app.py\n?? notes.txt\n"})

        result = make_plugin(runner).operations.rollback(steps=2)

        assert result.ok is False
        assert result.error_type == "precondition"
        assert "uncommitted changes" in result.error
        assert _resets(runner) == []

    def test_status_checked_first(self, ops, runner):
        ops.rollback(commit="abc123")
        assert runner.calls[0] == ["git", "status", "--porcelain"]

    def test_blank_status_lines_are_clean(self, make_plugin, make_runner):
        runner = make_runner(outputs={"git status --porcelain": "\n  \n"})

        result = make_plugin(runner).operations.rollback()

        assert result.ok is True
        assert _resets(runner) == [["git", "reset", "--hard", "HEAD~1"]]

    def test_status_failure_is_subprocess_error(self, make_plugin, make_runner):
        runner = make_runner(failures={"git status": "fatal: not a git repository"})

        result = make_plugin(runner).operations.rollback()

        assert result.ok is False
        assert result.error_type == "subprocess"
        assert _resets(runner) == []


class TestRollbackTarget:
    @pytest.mark.parametrize(
        "kwargs, ref",
        [
            ({"steps": 3}, "HEAD~3"),
            ({"commit": "abc123"}, "abc123"),
            ({}, "HEAD~1"),
            ({"commit": "abc123", "steps": 5}, "abc123"),
        ],
    )
    def test_reset_target(self, ops, runner, kwargs, ref):
        result = ops.rollback(**kwargs)

        assert result.ok is True
        assert _resets(runner) == [["git", "reset", "--hard", ref]]

    def test_steps_summary(self, ops):
        assert ops.rollback(steps=3).data == "Rolled back 3 commit(s)"

    def test_commit_summary(self, ops):
        assert ops.rollback(commit="abc123").data == "Rolled back to commit abc123"

    @pytest.mark.parametrize("steps", [0, -2])
    def test_non_positive_steps_rejected(self, ops, runner, steps):
        result = ops.rollback(steps=steps)

        assert result.ok is False
        assert result.error_type == "usage"
        assert runner.calls == []

    def test_success_clears_dirty_and_confirms(self, ops, runner, output):
        runner.set_dirty(True)

        ops.rollback()

        assert runner.dirty is False
        assert "[git/rollback] Rollback completed successfully." in output.messages("info")


class TestRollbackFailure:
    def test_reset_error_is_passed_through(self, make_plugin, make_runner):
        runner = make_runner(
            failures={"git reset": "fatal: ambiguous argument 'HEAD~9': unknown revision"}
        )

        result = make_plugin(runner).operations.rollback(steps=9)

        assert result.ok is False
        assert result.error_type == "subprocess"
        assert result.error == (
            "[git/rollback] Rollback failed: "
            "fatal: ambiguous argument 'HEAD~9': unknown revision"
        )

    def test_reset_is_not_retried(self, make_plugin, make_runner):
        runner = make_runner(failures={"git reset": "fatal: bad revision"})

        make_plugin(runner).operations.rollback(commit="deadbeef")

        assert len(_resets(runner)) == 1


class TestRollbackCommitValidation:
    @pytest.mark.parametrize("ref", ["--hard", "-q"])
    def test_option_like_commit_rejected(self, ops, runner, ref):
        result = ops.rollback(commit=ref)

        assert result.ok is False
        assert result.error_type == "usage"
        assert runner.calls == []
