"""Default branch detection."""

import logging
from collections.abc import Sequence

from gitc.vcs.command import GitCommandRunner
from gitc.vcs.exceptions import GitcError, NoDefaultBranchError
from gitc.vcs.repository import RepositoryInspector

logger = logging.getLogger(__name__)

DEFAULT_BRANCH_CANDIDATES = ("main", "master", "develop", "dev")


class DefaultBranchDetector:
    """Works out which branch the repository treats as its default.

    Resolution order (first match wins):

    1. The remote's symbolic HEAD (``refs/remotes/<remote>/HEAD``)
    2. A local branch named after a candidate, in candidate order
    3. A remote-tracking branch ending in ``/<candidate>``, in candidate order
    """

    def __init__(
        self,
        runner: GitCommandRunner,
        inspector: RepositoryInspector,
        remote_name: str = "origin",
        candidates: Sequence[str] = DEFAULT_BRANCH_CANDIDATES,
    ) -> None:
        """Initialize the detector.

        Args:
            runner: Runner used to invoke git
            inspector: Inspector used to list branches
            remote_name: Remote whose HEAD is authoritative
            candidates: Conventional default branch names, highest priority first
        """
        self.runner = runner
        self.inspector = inspector
        self.remote_name = remote_name
        self.candidates = tuple(candidates)

    async def detect(self) -> str:
        """Detect the default branch.

        Returns:
            Default branch short name

        Raises:
            NoDefaultBranchError: If no strategy produced a branch
            GitcError: If local branches cannot be listed
        """
        from_remote_head = await self._from_remote_head()
        if from_remote_head:
            return from_remote_head

        try:
            local_branches = await self.inspector.list_local_branches()
        except GitcError as e:
            raise e.in_context("detect-default-branch", message="failed to list branches") from e

        for candidate in self.candidates:
            if candidate in local_branches:
                logger.debug("Default branch %s found locally", candidate)
                return candidate

        try:
            remote_branches = await self.inspector.list_remote_branches()
        except GitcError as e:
            # Remote listing problems only disable this fallback
            logger.debug("Skipping remote branch fallback: %s", e)
            remote_branches = []

        for candidate in self.candidates:
            if any(branch.endswith(f"/{candidate}") for branch in remote_branches):
                logger.debug("Default branch %s found on a remote", candidate)
                return candidate

        raise NoDefaultBranchError("detect-default-branch")

    async def _from_remote_head(self) -> str | None:
        try:
            outcome = await self.runner.run(["symbolic-ref", f"refs/remotes/{self.remote_name}/HEAD"])
        except GitcError as e:
            logger.debug("Skipping %s/HEAD lookup: %s", self.remote_name, e)
            return None
        if not outcome.success or not outcome.stdout:
            return None

        branch = outcome.stdout.rsplit("/", 1)[-1]
        logger.debug("Default branch %s taken from %s/HEAD", branch, self.remote_name)
        return branch or None
