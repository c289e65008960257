"""Branch cleanup functionality."""

from gitc.cleanup.models import CleanupFailure, CleanupOptions, CleanupResult
from gitc.cleanup.orchestrator import CleanupOrchestrator

__all__ = [
    "CleanupFailure",
    "CleanupOptions",
    "CleanupOrchestrator",
    "CleanupResult",
]
