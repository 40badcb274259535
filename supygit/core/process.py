"""
Process runner for git invocations.

Runs argv lists with subprocess.run inside the repository and owns the
working-tree dirty flag that commits clear and the after-testing hook reads.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

from supygit.core.errors import SubprocessError

logger = logging.getLogger(__name__)


@dataclass
class ProcessOutcome:
    """Result of one subprocess invocation."""

    argv: list[str]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    @property
    def error_message(self) -> str:
        """Best available description of a failure."""
        return self.stderr.strip() or self.stdout.strip() or f"{' '.join(self.argv)} failed"


class CommandRunner:
    """
    Executes commands in a working directory.

    The dirty flag records that files were written since the last
    successful commit. It is set through write_file() or set_dirty()
    and cleared by the commit and rollback operators.
    """

    def __init__(self, working_dir: str | Path = ".", timeout: float = 30):
        self.working_dir = Path(os.path.expanduser(str(working_dir)))
        self.timeout = timeout
        self._dirty = False

    @property
    def dirty(self) -> bool:
        return self._dirty

    def set_dirty(self, dirty: bool) -> None:
        self._dirty = dirty

    def write_file(self, relative_path: str | Path, content: str) -> Path:
        """Write a file under the working directory and mark the tree dirty."""
        path = self.working_dir / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        self._dirty = True
        return path

    def run(
        self, argv: list[str], check: bool = True, timeout: float | None = None
    ) -> ProcessOutcome:
        """
        Run a command and capture its output.

        Args:
            argv: Command and arguments, passed without a shell
            check: Raise SubprocessError when the command exits non-zero
            timeout: Seconds before the command is killed (default: the runner timeout)

        Returns:
            ProcessOutcome with exit code and captured text

        Raises:
            SubprocessError: On timeout, missing executable, or (with check)
                a non-zero exit
        """
        timeout = self.timeout if timeout is None else timeout
        logger.debug("Running %s in %s", argv, self.working_dir)
        try:
            result = subprocess.run(
                argv,
                cwd=self.working_dir,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SubprocessError(
                f"{' '.join(argv)} timed out after {timeout:g}s", argv=argv
            ) from e
        except OSError as e:
            raise SubprocessError(f"Could not run {argv[0]}: {e}", argv=argv) from e

        outcome = ProcessOutcome(
            argv=list(argv),
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

        if check and not outcome.ok:
            logger.debug("%s exited with %d", argv, outcome.exit_code)
            raise SubprocessError(
                outcome.error_message,
                argv=outcome.argv,
                exit_code=outcome.exit_code,
                stderr=outcome.stderr,
            )

        return outcome
