"""
Immutable snapshot of a tracked object.

A Snapshot is created by Tracker.track() and holds the source reference
together with one tracked item per configured item tracker.
"""

from __future__ import annotations

from typing import Generic, List, Tuple

from ..core.types import D, T
from .tracked_items import BaseTrackedItem


class Snapshot(Generic[T, D]):
    """
    Frozen state of an object with comparison methods.

    Usage:
        snapshot = tracker.track(order)
        order.status = "shipped"
        for diff in snapshot.current_differences():
            print(diff)
    """

    def __init__(self, source: T, tracked_items: Tuple[BaseTrackedItem[T, D], ...]):
        self._source = source
        self._tracked_items = tracked_items

    @property
    def source(self) -> T:
        """The object that was tracked. The reference is kept, not copied."""
        return self._source

    @property
    def tracked_items(self) -> Tuple[BaseTrackedItem[T, D], ...]:
        """Captured items in registration order."""
        return self._tracked_items

    def compare(self, target: T) -> List[D]:
        """
        Compare the captured state against a target object.

        Args:
            target: Object of the tracked type, usually a newer version of
                the source or an unrelated object of the same shape

        Returns:
            Differences from all tracked items, in registration order
        """
        differences: List[D] = []
        for tracked_item in self._tracked_items:
            differences.extend(tracked_item.get_differences(target))
        return differences

    def current_differences(self) -> List[D]:
        """
        Compare the captured state against the live source object.

        Only meaningful when the source is mutated in place after tracking.

        Returns:
            Differences between the current source state and the snapshot
        """
        return self.compare(self._source)

    def __repr__(self) -> str:
        return f"Snapshot(source={self._source!r}, items={len(self._tracked_items)})"
