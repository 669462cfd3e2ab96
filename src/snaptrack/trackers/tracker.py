"""
Reusable tracker built from a TrackerConfig.

A Tracker takes snapshots of any number of objects. It holds no state of
its own besides the immutable configuration, so one instance can be shared
freely, including across threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Iterator, Tuple

from ..core.types import D, T
from ..tracked.snapshot import Snapshot
from .item_trackers import BaseItemTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerConfig(Generic[T, D]):
    """Ordered, immutable sequence of item trackers."""

    item_trackers: Tuple[BaseItemTracker[T, D], ...] = ()

    def __len__(self) -> int:
        return len(self.item_trackers)

    def __iter__(self) -> Iterator[BaseItemTracker[T, D]]:
        return iter(self.item_trackers)


class Tracker(Generic[T, D]):
    """
    Creates snapshots of objects according to a TrackerConfig.

    Usage:
        tracker = (
            TrackerBuilder()
            .track_property(lambda p: p.name, make_name_change)
            .build()
        )
        snapshot = tracker.track(person)
    """

    def __init__(self, config: TrackerConfig[T, D]):
        self._config = config

    @property
    def config(self) -> TrackerConfig[T, D]:
        """The immutable configuration this tracker applies."""
        return self._config

    def track(self, source: T) -> Snapshot[T, D]:
        """
        Capture the tracked state of an object.

        Args:
            source: Object to snapshot. The reference is retained by the
                snapshot for current_differences().

        Returns:
            New, independent Snapshot
        """
        tracked_items = tuple(item_tracker.get_tracked_item(source) for item_tracker in self._config)
        logger.debug(f"Tracked {type(source).__name__} with {len(tracked_items)} item tracker(s)")
        return Snapshot(source, tracked_items)

    def __repr__(self) -> str:
        kinds = ", ".join(item_tracker.kind for item_tracker in self._config)
        return f"Tracker([{kinds}])"
