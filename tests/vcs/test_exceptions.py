"""Tests for the git error taxonomy."""

import pytest

from gitc.vcs.exceptions import (
    BranchNotFoundError,
    CannotDeleteCurrentBranchError,
    CommandExecutionError,
    CommandTimeoutError,
    ErrorKind,
    GitcError,
    GitOperationError,
    MergeConflictError,
    NoDefaultBranchError,
    NotARepositoryError,
    RemoteAccessError,
    WorkingDirectoryError,
)


class TestRendering:
    """Tests for error messages."""

    def test_operation_only(self) -> None:
        """Test the operation-and-detail form."""
        assert str(GitOperationError("fetch", "network down")) == "git fetch: network down"

    def test_with_path(self) -> None:
        """Test the path form."""
        error = GitOperationError("checkout", "did not match", path="feature")

        assert str(error) == "git checkout feature: did not match"

    def test_message_takes_precedence_over_path(self) -> None:
        """Test that a context message replaces the path in the rendering."""
        error = GitOperationError("cleanup", "boom", path="feature", message="pull failed")

        assert str(error) == "git cleanup: pull failed: boom"

    def test_default_detail(self) -> None:
        """Test that the class reason is used when no detail is given."""
        assert str(NotARepositoryError("cleanup", path="/tmp/x")) == "git cleanup /tmp/x: not a git repository"


class TestKinds:
    """Tests for error kinds."""

    @pytest.mark.parametrize(
        ("error_class", "kind"),
        [
            (NotARepositoryError, ErrorKind.NOT_A_REPOSITORY),
            (NoDefaultBranchError, ErrorKind.NO_DEFAULT_BRANCH),
            (RemoteAccessError, ErrorKind.REMOTE_ACCESS_FAILED),
            (MergeConflictError, ErrorKind.MERGE_CONFLICT),
            (BranchNotFoundError, ErrorKind.BRANCH_NOT_FOUND),
            (CannotDeleteCurrentBranchError, ErrorKind.CANNOT_DELETE_CURRENT),
            (CommandExecutionError, ErrorKind.EXECUTION),
            (CommandTimeoutError, ErrorKind.EXECUTION),
            (WorkingDirectoryError, ErrorKind.IO),
            (GitOperationError, ErrorKind.OTHER),
        ],
    )
    def test_kind(self, error_class: type[GitcError], kind: ErrorKind) -> None:
        """Test that every error class carries its kind."""
        error = error_class("op")

        assert error.kind == kind
        assert isinstance(error, GitcError)


class TestInContext:
    """Tests for in_context."""

    def test_keeps_class_and_kind(self) -> None:
        """Test that wrapping preserves the error class."""
        inner = MergeConflictError("pull")

        outer = inner.in_context("cleanup", message="pull failed")

        assert type(outer) is MergeConflictError
        assert outer.kind == ErrorKind.MERGE_CONFLICT
        assert outer.__cause__ is inner
        assert str(outer) == "git cleanup: pull failed: git pull: merge conflict detected"

    def test_nested_context(self) -> None:
        """Test that repeated wrapping keeps the innermost detail."""
        inner = BranchNotFoundError("delete-branch", "gone", path="feature")

        outer = inner.in_context("cleanup", path="feature").in_context("run")

        assert isinstance(outer, BranchNotFoundError)
        assert str(outer) == "git run: git cleanup feature: git delete-branch feature: gone"
        assert outer.__cause__ is not None
        assert outer.__cause__.__cause__ is inner
