"""
snaptrack trackers module

Configuration layer: builder, trackers and item tracker variants.
"""

from .builder import TrackerBuilder
from .item_trackers import BaseItemTracker, CollectionTracker, PropertyTracker
from .tracker import Tracker, TrackerConfig

__all__ = [
    "TrackerBuilder",
    "Tracker",
    "TrackerConfig",
    "BaseItemTracker",
    "PropertyTracker",
    "CollectionTracker",
]
