"""
Exception types raised by snaptrack.

Only configuration problems are reported by the engine itself. Exceptions
raised by caller-supplied selectors, predicates and factories propagate
unchanged from track() and compare().
"""

from typing import Optional


class SnaptrackError(Exception):
    """Base class for all snaptrack errors."""
    pass


class InvalidConfigurationError(SnaptrackError, ValueError):
    """Raised when a tracker configuration is missing a callable or is malformed."""

    def __init__(self, message: str, field: Optional[str] = None, position: Optional[int] = None):
        self.field = field
        self.position = position
        if position is not None:
            message = f"Item tracker #{position}: {message}"
        super().__init__(message)
