"""Configuration models."""

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from gitc.config.exceptions import InvalidConfigurationError
from gitc.vcs.default_branch import DEFAULT_BRANCH_CANDIDATES
from gitc.vcs.remote import DEFAULT_REMOTE_CHECK_TIMEOUT

# Highest priority first
ENV_FILES = (".env.gitc", ".env")


class GitcConfig(BaseSettings):
    """Persistent settings for gitc.

    Values come from ``GITC_*`` environment variables and from ``.env.gitc``
    or ``.env`` in the current directory. Command-line flags override them.
    """

    remote_name: str = Field(
        default="origin",
        description="Remote used for default branch detection and access checks",
    )
    default_branch_candidates: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_BRANCH_CANDIDATES),
        description="Conventional default branch names, highest priority first",
    )
    command_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Timeout in seconds for each git command (no timeout if unset)",
    )
    remote_check_timeout: float = Field(
        default=DEFAULT_REMOTE_CHECK_TIMEOUT,
        gt=0,
        description="Timeout in seconds for the remote access check",
    )
    exclude_pattern: str | None = Field(
        default=None,
        description="Branch name never deleted (default for --exclude)",
    )
    skip_pull: bool = Field(
        default=False,
        description="Skip pulling the default branch (default for --no-pull)",
    )

    model_config = SettingsConfigDict(
        # pydantic-settings lets later files override earlier ones
        env_file=tuple(reversed(ENV_FILES)),
        env_file_encoding="utf-8",
        env_prefix="GITC_",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, env_file: str | Path | None = None, **kwargs: Any) -> None:
        """Initialize configuration.

        Args:
            env_file: Custom env file used instead of .env.gitc / .env
            **kwargs: Explicit configuration values

        Raises:
            InvalidConfigurationError: If env_file is specified but does not exist
        """
        if env_file is not None:
            env_path = Path(env_file)
            if not env_path.exists():
                raise InvalidConfigurationError(f"Environment file not found: {env_file}")
            kwargs["_env_file"] = env_path

        super().__init__(**kwargs)

    @field_validator("default_branch_candidates", mode="before")
    @classmethod
    def parse_candidates(cls, v: str | list[str]) -> list[str]:
        """Parse candidates from a comma-separated string or a list.

        Args:
            v: Raw candidates value

        Returns:
            Candidate names with blanks removed

        Raises:
            InvalidConfigurationError: If no candidate remains
        """
        items = v.split(",") if isinstance(v, str) else list(v)
        candidates = [item.strip() for item in items if item and item.strip()]
        if not candidates:
            raise InvalidConfigurationError("At least one default branch candidate is required")
        return candidates

    @field_validator("exclude_pattern", mode="before")
    @classmethod
    def blank_pattern_is_none(cls, v: str | None) -> str | None:
        """Treat an empty exclude pattern as unset.

        Args:
            v: Raw pattern

        Returns:
            The pattern, or None if blank
        """
        if v is None or not str(v).strip():
            return None
        return str(v).strip()

    @staticmethod
    def find_env_file() -> Path | None:
        """Find the environment file being used.

        Checks for .env.gitc and .env in current directory in that order.

        Returns:
            Path to the env file if found, None otherwise
        """
        for env_file in ENV_FILES:
            path = Path(env_file)
            if path.exists():
                return path.absolute()
        return None
