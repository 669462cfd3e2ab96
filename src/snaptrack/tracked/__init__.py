"""
snaptrack tracked module

Snapshot layer: frozen state captured from tracked objects.
"""

from .snapshot import Snapshot
from .tracked_items import BaseTrackedItem, TrackedCollection, TrackedProperty

__all__ = [
    "Snapshot",
    "BaseTrackedItem",
    "TrackedProperty",
    "TrackedCollection",
]
