"""Configuration-related exceptions."""


class ConfigurationError(Exception):
    """Base exception for configuration errors."""


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""


class InvalidOptionsError(ConfigurationError):
    """Cleanup options contradict each other."""
