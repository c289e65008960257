"""Git error taxonomy for gitc.

Every failure carries the name of the operation that failed and, optionally,
the path (or branch) it was working on plus a context message. Callers add
context with :meth:`GitcError.in_context`, which keeps the original error
class so ``isinstance`` checks and :attr:`GitcError.kind` survive wrapping.
"""

from enum import Enum
from typing import ClassVar, Self


class ErrorKind(str, Enum):
    """Category tag for gitc errors."""

    NOT_A_REPOSITORY = "not_a_repository"
    NO_DEFAULT_BRANCH = "no_default_branch"
    REMOTE_ACCESS_FAILED = "remote_access_failed"
    MERGE_CONFLICT = "merge_conflict"
    BRANCH_NOT_FOUND = "branch_not_found"
    CANNOT_DELETE_CURRENT = "cannot_delete_current"
    EXECUTION = "execution"
    IO = "io"
    OTHER = "other"


class GitcError(Exception):
    """Base exception for all git-related errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.OTHER
    reason: ClassVar[str] = "git operation failed"

    def __init__(
        self,
        operation: str,
        detail: str | None = None,
        *,
        path: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            operation: Name of the operation that failed (e.g. "fetch")
            detail: Description of the underlying failure (default: class reason)
            path: Path or branch the operation was working on
            message: Additional context message
        """
        self.operation = operation
        self.detail = detail or self.reason
        self.path = path
        self.message = message
        super().__init__(self._render())

    def _render(self) -> str:
        if self.message:
            return f"git {self.operation}: {self.message}: {self.detail}"
        if self.path:
            return f"git {self.operation} {self.path}: {self.detail}"
        return f"git {self.operation}: {self.detail}"

    def in_context(
        self,
        operation: str,
        *,
        path: str | None = None,
        message: str | None = None,
    ) -> Self:
        """Wrap this error with caller context, keeping its class.

        Args:
            operation: Name of the calling operation
            path: Path or branch the caller was working on
            message: Additional context message

        Returns:
            New error of the same class whose cause is this error
        """
        wrapped = type(self)(operation, str(self), path=path, message=message)
        wrapped.__cause__ = self
        return wrapped


class NotARepositoryError(GitcError):
    """Raised when a directory is not a git repository."""

    kind = ErrorKind.NOT_A_REPOSITORY
    reason = "not a git repository"


class NoDefaultBranchError(GitcError):
    """Raised when no default branch could be detected."""

    kind = ErrorKind.NO_DEFAULT_BRANCH
    reason = "could not detect default branch"


class RemoteAccessError(GitcError):
    """Raised when the remote repository cannot be reached."""

    kind = ErrorKind.REMOTE_ACCESS_FAILED
    reason = "failed to access remote repository"


class MergeConflictError(GitcError):
    """Raised when a pull stops on a merge conflict."""

    kind = ErrorKind.MERGE_CONFLICT
    reason = "merge conflict detected"


class BranchNotFoundError(GitcError):
    """Raised when a specified branch does not exist."""

    kind = ErrorKind.BRANCH_NOT_FOUND
    reason = "branch not found"


class CannotDeleteCurrentBranchError(GitcError):
    """Raised when git refuses to delete the checked out branch."""

    kind = ErrorKind.CANNOT_DELETE_CURRENT
    reason = "cannot delete current branch"


class CommandExecutionError(GitcError):
    """Raised when the git executable cannot be run at all."""

    kind = ErrorKind.EXECUTION
    reason = "failed to execute git command"


class CommandTimeoutError(CommandExecutionError):
    """Raised when a git command does not finish within its timeout."""

    reason = "git command timed out"


class WorkingDirectoryError(GitcError):
    """Raised when the working directory cannot be determined."""

    kind = ErrorKind.IO
    reason = "failed to get current directory"


class GitOperationError(GitcError):
    """Raised when a git operation fails for any other reason."""

