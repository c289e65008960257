"""gitc: switch to the default branch, sync it, and delete stale local branches."""

__version__ = "0.1.0"
