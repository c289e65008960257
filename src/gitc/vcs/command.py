"""Execution of git commands."""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import NamedTuple

from git import Git
from git.exc import GitCommandNotFound

from gitc.vcs.exceptions import CommandExecutionError, CommandTimeoutError, GitOperationError

logger = logging.getLogger(__name__)


class CommandOutcome(NamedTuple):
    """Result of a single git invocation."""

    success: bool
    stdout: str
    stderr: str
    exit_code: int | None = None

    def lines(self) -> list[str]:
        """Get the non-blank lines of stdout.

        Returns:
            Stripped stdout lines, blank lines removed
        """
        return [line.strip() for line in self.stdout.splitlines() if line.strip()]

    def raise_for_status(self, operation: str, path: str | None = None) -> None:
        """Raise if the command exited with a non-zero status.

        Args:
            operation: Operation name to report
            path: Path or branch the operation was working on

        Raises:
            GitOperationError: If the command failed
        """
        if not self.success:
            raise GitOperationError(
                operation,
                f"git command failed with exit code {self.exit_code}: {self.stderr}",
                path=path,
            )


class GitCommandRunner:
    """Runs the git executable and captures its output.

    A non-zero exit status is not an error at this level: it is reported in
    the returned :class:`CommandOutcome` and the caller decides what it means.
    """

    def __init__(
        self,
        working_dir: str | Path | None = None,
        default_timeout: float | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            working_dir: Directory to run git in (default: current directory at call time)
            default_timeout: Timeout in seconds used when ``run`` gets none
        """
        self.working_dir = Path(working_dir) if working_dir is not None else None
        self.default_timeout = default_timeout
        self._git = Git(self.working_dir)

    async def run(self, args: Sequence[str], timeout: float | None = None) -> CommandOutcome:
        """Run ``git <args>``.

        With a timeout, the blocking call runs in a worker thread raced against
        the timer. On expiry the outcome is discarded; GitPython is asked to
        kill the child after the same delay, but that cleanup is best-effort.

        Args:
            args: Arguments passed to git
            timeout: Timeout in seconds (default: the runner's default timeout)

        Returns:
            CommandOutcome with trimmed output and exit status

        Raises:
            CommandExecutionError: If git could not be started
            CommandTimeoutError: If the command did not finish in time
        """
        timeout = timeout if timeout is not None else self.default_timeout
        command = [Git.GIT_PYTHON_GIT_EXECUTABLE or "git", *args]
        operation = args[0] if args else "git"
        logger.debug("Running %s (timeout=%s)", " ".join(command), timeout)

        try:
            if timeout is None:
                outcome = await asyncio.to_thread(self._execute, command, None)
            else:
                outcome = await asyncio.wait_for(asyncio.to_thread(self._execute, command, timeout), timeout=timeout)
        except asyncio.TimeoutError as e:
            msg = f"command timed out after {timeout:g}s"
            raise CommandTimeoutError(operation, msg) from e
        except GitCommandNotFound as e:
            msg = f"git executable not found: {e}"
            raise CommandExecutionError(operation, msg) from e
        except OSError as e:
            raise CommandExecutionError(operation, f"failed to execute git command: {e}") from e

        logger.debug("git %s exited with %s", " ".join(args), outcome.exit_code)
        return outcome

    def _execute(self, command: list[str], timeout: float | None) -> CommandOutcome:
        status, stdout, stderr = self._git.execute(
            command,
            with_extended_output=True,
            with_exceptions=False,
            kill_after_timeout=timeout,
        )
        return CommandOutcome(
            success=status == 0,
            stdout=stdout.strip(),
            stderr=stderr.strip(),
            exit_code=status,
        )
