"""Synchronization with the remote repository."""

from gitc.vcs.command import CommandOutcome, GitCommandRunner
from gitc.vcs.exceptions import (
    GitcError,
    GitOperationError,
    MergeConflictError,
    RemoteAccessError,
)

DEFAULT_REMOTE_CHECK_TIMEOUT = 10.0


class RemoteSynchronizer:
    """Fetches from and pulls from the configured remote."""

    def __init__(self, runner: GitCommandRunner, remote_name: str = "origin") -> None:
        """Initialize the synchronizer.

        Args:
            runner: Runner used to invoke git
            remote_name: Remote probed by ``check_remote_access``
        """
        self.runner = runner
        self.remote_name = remote_name

    async def fetch(self) -> None:
        """Update all remote-tracking refs and prune stale ones.

        Raises:
            GitcError: If the fetch fails
        """
        outcome = await self.runner.run(["fetch", "--all", "--prune"])
        outcome.raise_for_status("fetch")

    async def pull(self) -> None:
        """Pull the current branch.

        Raises:
            MergeConflictError: If the pull stopped on a conflict
            GitcError: If the pull fails for another reason
        """
        outcome = await self.runner.run(["pull"])
        if outcome.success:
            return
        if _mentions_conflict(outcome):
            raise MergeConflictError("pull")
        outcome.raise_for_status("pull")

    async def pull_with_rebase(self) -> None:
        """Pull the current branch, rebasing local commits.

        Raises:
            MergeConflictError: If the rebase stopped on a conflict
            GitcError: If the pull fails for another reason
        """
        outcome = await self.runner.run(["pull", "--rebase"])
        if outcome.success:
            return
        if _mentions_conflict(outcome):
            raise MergeConflictError("pull", message="conflict during rebase")
        raise GitOperationError(
            "pull",
            f"git command failed with exit code {outcome.exit_code}: {outcome.stderr}",
            message="rebase failed",
        )

    async def check_remote_access(self, timeout: float = DEFAULT_REMOTE_CHECK_TIMEOUT) -> None:
        """Verify the remote can be reached.

        An empty but reachable remote is accepted as long as it has a URL.

        Args:
            timeout: Seconds to wait for ``ls-remote``

        Raises:
            RemoteAccessError: If the remote is unreachable or not configured
        """
        try:
            outcome = await self.runner.run(["ls-remote", "--heads", self.remote_name], timeout=timeout)
            outcome.raise_for_status("ls-remote")
        except GitcError as e:
            raise RemoteAccessError("check-remote", message=f"failed to access remote: {e}") from e

        if outcome.stdout:
            return

        url_outcome = await self.runner.run(["remote", "get-url", self.remote_name])
        if not url_outcome.success:
            raise RemoteAccessError("check-remote", message=f"no remote '{self.remote_name}' configured")
        if not url_outcome.stdout:
            raise RemoteAccessError("check-remote", message=f"remote '{self.remote_name}' has no URL")

    async def has_remote(self, name: str) -> bool:
        """Check whether a remote is configured.

        Args:
            name: Remote name

        Returns:
            True if ``git remote`` lists the name

        Raises:
            GitcError: If remotes cannot be listed
        """
        outcome = await self.runner.run(["remote"])
        outcome.raise_for_status("check-remote")
        return name in outcome.lines()

    async def remote_url(self, name: str) -> str:
        """Get the URL of a remote.

        Args:
            name: Remote name

        Returns:
            Configured URL

        Raises:
            GitcError: If the remote does not exist
        """
        outcome = await self.runner.run(["remote", "get-url", name])
        outcome.raise_for_status("get-remote-url", path=name)
        return outcome.stdout


def _mentions_conflict(outcome: CommandOutcome) -> bool:
    return "conflict" in outcome.stderr or "conflict" in outcome.stdout
