"""Repository inspection and local branch operations."""

import logging
from pathlib import Path

from gitc.vcs.command import GitCommandRunner
from gitc.vcs.exceptions import (
    BranchNotFoundError,
    CannotDeleteCurrentBranchError,
    GitcError,
    GitOperationError,
    NotARepositoryError,
    WorkingDirectoryError,
)

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"

# stderr fragments, lowercased, for refusing to delete a checked out branch
_CURRENT_BRANCH_MARKERS = ("checked out at", "cannot delete branch", "used by worktree at")


class RepositoryInspector:
    """Answers questions about the repository in the working directory.

    Also performs the two local branch mutations the cleanup needs:
    checkout and delete.
    """

    def __init__(self, runner: GitCommandRunner) -> None:
        """Initialize the inspector.

        Args:
            runner: Runner used to invoke git
        """
        self.runner = runner

    def is_repository(self, path: str | Path) -> None:
        """Check that ``path`` holds a git metadata directory.

        Args:
            path: Directory to check

        Raises:
            NotARepositoryError: If ``.git`` is missing or is not a directory
            WorkingDirectoryError: If the metadata directory cannot be inspected
        """
        git_dir = Path(path) / GIT_DIR_NAME
        try:
            if not git_dir.exists():
                raise NotARepositoryError("is-repository", f"not a git repository: {path}", path=str(path))
            if not git_dir.is_dir():
                raise NotARepositoryError(
                    "is-repository",
                    f"{GIT_DIR_NAME} exists but is not a directory: {git_dir}",
                    path=str(path),
                )
        except OSError as e:
            raise WorkingDirectoryError("is-repository", f"failed to check git directory: {e}") from e

    def current_directory(self) -> Path:
        """Get the directory git commands run in.

        This is the runner's working directory when it has one, otherwise the
        process's current directory.

        Returns:
            Directory the runner operates on

        Raises:
            WorkingDirectoryError: If it cannot be determined (e.g. it was deleted)
        """
        if self.runner.working_dir is not None:
            return self.runner.working_dir
        try:
            return Path.cwd()
        except OSError as e:
            raise WorkingDirectoryError("current-directory", f"failed to get current directory: {e}") from e

    async def current_branch(self) -> str:
        """Get the name of the checked out branch.

        Returns:
            Current branch name ("HEAD" when detached)

        Raises:
            GitcError: If git fails or prints nothing
        """
        outcome = await self.runner.run(["rev-parse", "--abbrev-ref", "HEAD"])
        outcome.raise_for_status("get-current-branch")
        if not outcome.stdout:
            raise GitOperationError("get-current-branch", "no output from git command")
        return outcome.stdout

    async def list_local_branches(self) -> list[str]:
        """List local branch names in git's order.

        Returns:
            Local branch names, possibly empty

        Raises:
            GitcError: If git fails
        """
        outcome = await self.runner.run(["branch", "--format=%(refname:short)"])
        outcome.raise_for_status("list-local-branches")
        return outcome.lines()

    async def list_remote_branches(self) -> list[str]:
        """List remote-tracking branch names (e.g. ``origin/main``).

        Returns:
            Remote-qualified branch names, possibly empty

        Raises:
            GitcError: If git fails
        """
        outcome = await self.runner.run(["branch", "-r", "--format=%(refname:short)"])
        outcome.raise_for_status("list-remote-branches")
        return outcome.lines()

    async def branch_exists(self, name: str) -> bool:
        """Check whether a branch exists locally or on any remote.

        A failure to list remote branches is treated as "not on a remote".

        Args:
            name: Short branch name

        Returns:
            True if the branch exists

        Raises:
            GitcError: If local branches cannot be listed
        """
        if name in await self.list_local_branches():
            return True

        try:
            remote_branches = await self.list_remote_branches()
        except GitcError as e:
            logger.debug("Ignoring remote branch listing failure: %s", e)
            return False

        return any(branch.endswith(f"/{name}") for branch in remote_branches)

    async def checkout(self, branch: str) -> None:
        """Switch the working tree to ``branch``.

        Args:
            branch: Branch to check out

        Raises:
            GitcError: If the checkout fails
        """
        outcome = await self.runner.run(["checkout", branch])
        outcome.raise_for_status("checkout", path=branch)

    async def delete_branch(self, branch: str, force: bool = False) -> None:
        """Delete a local branch.

        Args:
            branch: Branch to delete
            force: Use ``-D`` to delete even if the branch is not fully merged

        Raises:
            CannotDeleteCurrentBranchError: If the branch is checked out
            BranchNotFoundError: If the branch does not exist
            GitOperationError: If the deletion fails for another reason
        """
        outcome = await self.runner.run(["branch", "-D" if force else "-d", branch])
        if outcome.success:
            return

        stderr = outcome.stderr
        detail = f"git command failed with exit code {outcome.exit_code}: {stderr}"
        lowered = stderr.lower()
        if any(marker in lowered for marker in _CURRENT_BRANCH_MARKERS):
            raise CannotDeleteCurrentBranchError("delete-branch", detail, path=branch)
        if "not found" in stderr:
            raise BranchNotFoundError("delete-branch", detail, path=branch)
        raise GitOperationError("delete-branch", detail, path=branch)
