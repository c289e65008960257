"""Tests for DefaultBranchDetector."""

from collections.abc import Mapping, Sequence
from unittest.mock import AsyncMock

import git
import pytest

from gitc.vcs.command import CommandOutcome, GitCommandRunner
from gitc.vcs.default_branch import DEFAULT_BRANCH_CANDIDATES, DefaultBranchDetector
from gitc.vcs.exceptions import CommandTimeoutError, ErrorKind, GitOperationError, NoDefaultBranchError
from gitc.vcs.repository import RepositoryInspector

SYMBOLIC_REF = ("symbolic-ref", "refs/remotes/origin/HEAD")
LOCAL = ("branch", "--format=%(refname:short)")
REMOTE = ("branch", "-r", "--format=%(refname:short)")


def ok(stdout: str = "") -> CommandOutcome:
    """Successful outcome."""
    return CommandOutcome(success=True, stdout=stdout, stderr="", exit_code=0)


def failed(stderr: str = "fatal: boom") -> CommandOutcome:
    """Failed outcome."""
    return CommandOutcome(success=False, stdout="", stderr=stderr, exit_code=128)


def scripted_runner(responses: Mapping[tuple[str, ...], CommandOutcome]) -> AsyncMock:
    """Create a mock runner answering by argument tuple.

    Args:
        responses: Outcome for each git argument tuple

    Returns:
        Mock runner
    """
    runner = AsyncMock(spec=GitCommandRunner)

    async def run(args: Sequence[str], timeout: float | None = None) -> CommandOutcome:
        return responses[tuple(args)]

    runner.run.side_effect = run
    return runner


def make_detector(runner: AsyncMock, **kwargs: object) -> DefaultBranchDetector:
    """Create a detector over the given runner."""
    return DefaultBranchDetector(runner, RepositoryInspector(runner), **kwargs)  # type: ignore[arg-type]


class TestDetectFromRemoteHead:
    """Tests for the remote HEAD strategy."""

    @pytest.mark.asyncio
    async def test_remote_head_wins(self) -> None:
        """Test that origin/HEAD is used before any local branch."""
        runner = scripted_runner({SYMBOLIC_REF: ok("refs/remotes/origin/trunk")})

        assert await make_detector(runner).detect() == "trunk"
        assert runner.run.call_count == 1

    @pytest.mark.asyncio
    async def test_remote_name_is_configurable(self) -> None:
        """Test that the configured remote is queried."""
        runner = scripted_runner({("symbolic-ref", "refs/remotes/upstream/HEAD"): ok("refs/remotes/upstream/main")})

        assert await make_detector(runner, remote_name="upstream").detect() == "main"

    @pytest.mark.asyncio
    async def test_empty_remote_head_falls_through(self) -> None:
        """Test that empty symbolic-ref output is treated as unknown."""
        runner = scripted_runner({SYMBOLIC_REF: ok(""), LOCAL: ok("master")})

        assert await make_detector(runner).detect() == "master"

    @pytest.mark.asyncio
    async def test_remote_head_timeout_falls_through(self) -> None:
        """Test that a timed out symbolic-ref lookup moves on to local candidates."""
        runner = scripted_runner({LOCAL: ok("feature\nmain")})
        answer = runner.run.side_effect

        async def run(args: Sequence[str], timeout: float | None = None) -> CommandOutcome:
            if tuple(args) == SYMBOLIC_REF:
                raise CommandTimeoutError("symbolic-ref", "command timed out after 1s")
            return await answer(args, timeout)

        runner.run.side_effect = run

        assert await make_detector(runner).detect() == "main"


class TestDetectFallbacks:
    """Tests for the candidate fallbacks."""

    @pytest.mark.asyncio
    async def test_local_candidate_order(self) -> None:
        """Test that candidates are tried in priority order, not branch order."""
        runner = scripted_runner({SYMBOLIC_REF: failed(), LOCAL: ok("develop\nmaster\nfeature")})

        assert await make_detector(runner).detect() == "master"

    @pytest.mark.asyncio
    async def test_custom_candidates(self) -> None:
        """Test that custom candidates replace the defaults."""
        runner = scripted_runner({SYMBOLIC_REF: failed(), LOCAL: ok("main\ntrunk")})

        assert await make_detector(runner, candidates=["trunk", "main"]).detect() == "trunk"

    @pytest.mark.asyncio
    async def test_remote_candidate(self) -> None:
        """Test that a remote-tracking candidate is found when none is local."""
        runner = scripted_runner(
            {
                SYMBOLIC_REF: failed(),
                LOCAL: ok("feature"),
                REMOTE: ok("origin/feature\norigin/develop\norigin/master"),
            }
        )

        assert await make_detector(runner).detect() == "master"

    @pytest.mark.asyncio
    async def test_remote_listing_failure_is_tolerated(self) -> None:
        """Test that a remote listing failure leads to NoDefaultBranchError."""
        runner = scripted_runner({SYMBOLIC_REF: failed(), LOCAL: ok("feature"), REMOTE: failed()})

        with pytest.raises(NoDefaultBranchError) as exc_info:
            await make_detector(runner).detect()

        assert exc_info.value.kind == ErrorKind.NO_DEFAULT_BRANCH
        assert str(exc_info.value) == "git detect-default-branch: could not detect default branch"

    @pytest.mark.asyncio
    async def test_local_listing_failure_propagates(self) -> None:
        """Test that a local listing failure is wrapped and raised."""
        runner = scripted_runner({SYMBOLIC_REF: failed(), LOCAL: failed("fatal: corrupt")})

        with pytest.raises(GitOperationError) as exc_info:
            await make_detector(runner).detect()

        error = exc_info.value
        assert error.operation == "detect-default-branch"
        assert error.message == "failed to list branches"
        assert "fatal: corrupt" in str(error)

    def test_default_candidates(self) -> None:
        """Test the conventional candidate order."""
        assert DEFAULT_BRANCH_CANDIDATES == ("main", "master", "develop", "dev")


class TestDetectInRealRepository:
    """Tests against repositories built with GitPython."""

    @pytest.mark.asyncio
    async def test_local_main(self, git_repo: git.Repo) -> None:
        """Test detection in a repository without a remote."""
        runner = GitCommandRunner()

        assert await DefaultBranchDetector(runner, RepositoryInspector(runner)).detect() == "main"

    @pytest.mark.asyncio
    async def test_origin_head(self, repo_with_origin: git.Repo) -> None:
        """Test that origin/HEAD overrides local candidates."""
        repo_with_origin.git.checkout("-b", "trunk")
        repo_with_origin.git.push("origin", "trunk")
        repo_with_origin.git.remote("set-head", "origin", "trunk")
        repo_with_origin.git.checkout("main")
        runner = GitCommandRunner()

        assert await DefaultBranchDetector(runner, RepositoryInspector(runner)).detect() == "trunk"
