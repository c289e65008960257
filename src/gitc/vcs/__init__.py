"""Git access layer for gitc.

Thin wrappers around the git executable: running commands, inspecting the
repository, detecting the default branch and talking to the remote.
"""

from gitc.vcs.command import CommandOutcome, GitCommandRunner
from gitc.vcs.default_branch import DEFAULT_BRANCH_CANDIDATES, DefaultBranchDetector
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
from gitc.vcs.remote import RemoteSynchronizer
from gitc.vcs.repository import RepositoryInspector

__all__ = [
    "DEFAULT_BRANCH_CANDIDATES",
    "BranchNotFoundError",
    "CannotDeleteCurrentBranchError",
    "CommandExecutionError",
    "CommandOutcome",
    "CommandTimeoutError",
    "DefaultBranchDetector",
    "ErrorKind",
    "GitCommandRunner",
    "GitOperationError",
    "GitcError",
    "MergeConflictError",
    "NoDefaultBranchError",
    "NotARepositoryError",
    "RemoteAccessError",
    "RemoteSynchronizer",
    "RepositoryInspector",
    "WorkingDirectoryError",
]
