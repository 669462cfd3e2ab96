"""
snaptrack: Snapshot-based change tracking for Python objects

Capture selected state of an object graph with a reusable Tracker, then
compare the snapshot against a later or different object to get a list of
caller-defined difference values.
"""

__version__ = "0.1.0"

from .errors import InvalidConfigurationError, SnaptrackError
from .tracked.snapshot import Snapshot
from .trackers.builder import TrackerBuilder
from .trackers.tracker import Tracker, TrackerConfig

__all__ = [
    "TrackerBuilder",
    "Tracker",
    "TrackerConfig",
    "Snapshot",
    "SnaptrackError",
    "InvalidConfigurationError",
]
