"""Branch cleanup orchestration."""

import logging
from typing import Any

from gitc.cleanup.models import CleanupFailure, CleanupOptions, CleanupResult
from gitc.config import GitcConfig
from gitc.vcs.command import GitCommandRunner
from gitc.vcs.default_branch import DefaultBranchDetector
from gitc.vcs.exceptions import BranchNotFoundError, GitcError, NotARepositoryError
from gitc.vcs.remote import RemoteSynchronizer
from gitc.vcs.repository import RepositoryInspector

logger = logging.getLogger(__name__)

OPERATION = "cleanup"


class CleanupOrchestrator:
    """Orchestrates the branch cleanup workflow.

    Coordinates:
    - Repository and default branch checks
    - Switching to the default branch
    - Fetch and pull
    - Deleting every other local branch

    Everything up to the branch switch, plus listing local branches, is
    fatal: the error is raised and no result is produced. Fetch, pull and
    individual deletions are contained: their failures are recorded in
    ``CleanupResult.errors`` and the run continues.
    """

    def __init__(self, config: GitcConfig, runner: GitCommandRunner | None = None) -> None:
        """Initialize the cleanup orchestrator.

        Args:
            config: Application configuration
            runner: Git runner (default: one for the current directory)
        """
        self.config = config
        self.runner = runner or GitCommandRunner(default_timeout=config.command_timeout)
        self.inspector = RepositoryInspector(self.runner)
        self.detector = DefaultBranchDetector(
            self.runner,
            self.inspector,
            remote_name=config.remote_name,
            candidates=config.default_branch_candidates,
        )
        self.synchronizer = RemoteSynchronizer(self.runner, remote_name=config.remote_name)

    async def execute(self, options: CleanupOptions) -> CleanupResult:
        """Run the cleanup.

        Workflow:
        1. Validate options
        2. Confirm the working directory is a repository
        3. Resolve the default branch
        4. Switch to it (simulated in dry-run mode)
        5. Fetch (always, even in dry-run mode)
        6. Stop here in dry-run mode
        7. Pull, unless skipped
        8. List local branches
        9. Delete every branch except the default and the excluded one

        Args:
            options: Options for this run

        Returns:
            CleanupResult with deleted, skipped and failed branches

        Raises:
            InvalidOptionsError: If the options are contradictory
            GitcError: If a fatal stage fails
        """
        options.ensure_valid()
        self._trace(options, "Starting cleanup")
        self._trace(
            options,
            "Options: dry_run=%s, force=%s, skip_confirmation=%s, skip_pull=%s",
            options.dry_run,
            options.force,
            options.skip_confirmation,
            options.skip_pull,
        )

        errors: list[CleanupFailure] = []

        self._confirm_repository(options)
        default_branch = await self._resolve_default_branch(options)
        await self._switch_to(default_branch, options)

        self._trace(options, "Fetching (git fetch --all --prune)")
        try:
            await self.synchronizer.fetch()
            self._trace(options, "Fetch complete")
        except GitcError as e:
            self._trace(options, "Fetch failed: %s", e)
            errors.append(CleanupFailure.from_error(e.in_context(OPERATION, message="fetch failed")))

        if options.dry_run:
            self._trace(options, "Dry run: skipping everything after fetch")
            return CleanupResult(default_branch=default_branch, errors=tuple(errors), was_dry_run=True)

        if options.skip_pull:
            self._trace(options, "Skipping pull")
        else:
            self._trace(options, "Pulling %s", default_branch)
            try:
                await self.synchronizer.pull()
                self._trace(options, "Pull complete")
            except GitcError as e:
                self._trace(options, "Pull failed: %s", e)
                errors.append(CleanupFailure.from_error(e.in_context(OPERATION, message="pull failed")))

        try:
            branches = await self.inspector.list_local_branches()
        except GitcError as e:
            raise e.in_context(OPERATION) from e
        self._trace(options, "Local branches: %s", branches)

        deleted: list[str] = []
        skipped: list[str] = []
        for branch in branches:
            if branch == default_branch:
                self._trace(options, "Skipping default branch %s", branch)
                skipped.append(branch)
                continue

            if options.exclude_pattern is not None and branch == options.exclude_pattern:
                self._trace(options, "Skipping excluded branch %s", branch)
                skipped.append(branch)
                continue

            try:
                await self.inspector.delete_branch(branch, force=options.force)
            except GitcError as e:
                self._trace(options, "Could not delete %s: %s", branch, e)
                errors.append(CleanupFailure.from_error(e.in_context(OPERATION, path=branch)))
                skipped.append(branch)
            else:
                self._trace(options, "Deleted %s", branch)
                deleted.append(branch)

        self._trace(
            options,
            "Cleanup finished: %d deleted, %d skipped, %d errors",
            len(deleted),
            len(skipped),
            len(errors),
        )
        return CleanupResult(
            default_branch=default_branch,
            deleted_branches=tuple(deleted),
            skipped_branches=tuple(skipped),
            errors=tuple(errors),
            was_dry_run=False,
        )

    def _confirm_repository(self, options: CleanupOptions) -> None:
        """Check that the working directory is a git repository.

        Args:
            options: Options for this run

        Raises:
            NotARepositoryError: If it is not
            GitcError: If the working directory cannot be determined
        """
        self._trace(options, "Checking for a git repository")
        try:
            cwd = self.inspector.current_directory()
        except GitcError as e:
            raise e.in_context(OPERATION) from e
        self._trace(options, "Working directory: %s", cwd)

        try:
            self.inspector.is_repository(cwd)
        except NotARepositoryError as e:
            raise NotARepositoryError(OPERATION, path=str(cwd)) from e
        except GitcError as e:
            raise e.in_context(OPERATION, path=str(cwd)) from e

    async def _resolve_default_branch(self, options: CleanupOptions) -> str:
        """Use the requested default branch or detect one.

        Args:
            options: Options for this run

        Returns:
            Default branch name

        Raises:
            BranchNotFoundError: If the requested branch does not exist
            GitcError: If detection fails
        """
        self._trace(options, "Resolving default branch")
        requested = options.default_branch
        if requested is None:
            try:
                detected = await self.detector.detect()
            except GitcError as e:
                raise e.in_context(OPERATION) from e
            self._trace(options, "Detected default branch %s", detected)
            return detected

        try:
            exists = await self.inspector.branch_exists(requested)
        except GitcError as e:
            raise e.in_context(OPERATION, path=requested) from e
        if not exists:
            raise BranchNotFoundError(
                OPERATION,
                f"specified default branch '{requested}' does not exist",
                path=requested,
            )

        self._trace(options, "Using requested default branch %s", requested)
        return requested

    async def _switch_to(self, default_branch: str, options: CleanupOptions) -> None:
        """Check out the default branch unless it is already current.

        Args:
            default_branch: Branch to switch to
            options: Options for this run

        Raises:
            GitcError: If the current branch cannot be read or the checkout fails
        """
        try:
            current = await self.inspector.current_branch()
        except GitcError as e:
            raise e.in_context(OPERATION) from e
        self._trace(options, "Current branch: %s", current)

        if current == default_branch:
            self._trace(options, "Already on the default branch")
            return

        if options.dry_run:
            self._trace(options, "Dry run: would switch %s -> %s", current, default_branch)
            return

        self._trace(options, "Switching %s -> %s", current, default_branch)
        try:
            await self.inspector.checkout(default_branch)
        except GitcError as e:
            raise e.in_context(OPERATION, message="failed to switch to default branch") from e

    def _trace(self, options: CleanupOptions, msg: str, *args: Any) -> None:
        """Log a stage message, at INFO when verbose and DEBUG otherwise."""
        logger.log(logging.INFO if options.verbose else logging.DEBUG, msg, *args)
