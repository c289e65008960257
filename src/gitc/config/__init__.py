"""Configuration management for gitc."""

from gitc.config.exceptions import (
    ConfigurationError,
    InvalidConfigurationError,
    InvalidOptionsError,
)
from gitc.config.models import GitcConfig

__all__ = [
    "ConfigurationError",
    "GitcConfig",
    "InvalidConfigurationError",
    "InvalidOptionsError",
]
