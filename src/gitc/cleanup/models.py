"""Cleanup option and result models."""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gitc.config.exceptions import InvalidOptionsError
from gitc.vcs.exceptions import ErrorKind, GitcError


class CleanupOptions(BaseModel):
    """Options for a single cleanup run."""

    model_config = ConfigDict(frozen=True)

    dry_run: bool = Field(default=False, description="Report the plan without deleting or switching branches")
    verbose: bool = Field(default=False, description="Log every cleanup stage")
    skip_confirmation: bool = Field(default=False, description="Do not ask before deleting branches")
    force: bool = Field(default=False, description="Delete branches even if they are not fully merged")
    default_branch: str | None = Field(default=None, description="Use this branch instead of detecting one")
    exclude_pattern: str | None = Field(default=None, description="Branch name that is never deleted")
    skip_pull: bool = Field(default=False, description="Do not pull the default branch")

    @field_validator("default_branch", "exclude_pattern", mode="before")
    @classmethod
    def blank_is_none(cls, v: str | None) -> str | None:
        """Treat empty strings as unset.

        Args:
            v: Raw value

        Returns:
            The value, or None if empty
        """
        if v is None or v == "":
            return None
        return v

    @model_validator(mode="after")
    def validate_exclusive_flags(self) -> Self:
        """Reject contradictory flags.

        Returns:
            Self

        Raises:
            InvalidOptionsError: If dry_run and force are both set
        """
        self.ensure_valid()
        return self

    def ensure_valid(self) -> None:
        """Check option consistency.

        Raises:
            InvalidOptionsError: If dry_run and force are both set
        """
        if self.dry_run and self.force:
            raise InvalidOptionsError("--dry-run and --force cannot be used together")


class CleanupFailure(BaseModel):
    """A failure recorded during cleanup without aborting it."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    operation: str
    path: str | None = None
    message: str | None = None
    detail: str

    @classmethod
    def from_error(cls, error: GitcError) -> "CleanupFailure":
        """Build a failure record from an error.

        Args:
            error: The contained error

        Returns:
            Failure record describing the error
        """
        return cls(
            kind=error.kind,
            operation=error.operation,
            path=error.path,
            message=error.message,
            detail=str(error),
        )

    def __str__(self) -> str:
        return self.detail


class CleanupResult(BaseModel):
    """Outcome of a cleanup run."""

    model_config = ConfigDict(frozen=True)

    default_branch: str
    deleted_branches: tuple[str, ...] = ()
    skipped_branches: tuple[str, ...] = ()
    errors: tuple[CleanupFailure, ...] = ()
    was_dry_run: bool = False

    @property
    def has_errors(self) -> bool:
        """Check if any contained failure was recorded.

        Returns:
            True if errors is not empty
        """
        return bool(self.errors)

    @property
    def deleted_count(self) -> int:
        """Number of deleted branches."""
        return len(self.deleted_branches)
