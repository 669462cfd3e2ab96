"""
Reusable item tracker configurations.

Item trackers are the configuration half of tracking: they are stateless,
shared by every snapshot taken with the same Tracker, and know how to
capture one piece of state from a source object.

Two variants exist:
- PropertyTracker: captures a single value
- CollectionTracker: captures every item of a collection through a nested
  Tracker, allowing arbitrary nesting depth
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, Optional

from ..core.types import (
    D,
    DifferenceFactory,
    I,
    ItemFactory,
    ItemsSelector,
    MatchingPredicate,
    Selector,
    T,
    V,
)
from ..tracked.tracked_items import BaseTrackedItem, TrackedCollection, TrackedProperty

if TYPE_CHECKING:
    from .tracker import Tracker

logger = logging.getLogger(__name__)


class BaseItemTracker(ABC, Generic[T, D]):
    """
    Base class for item trackers.

    Subclasses must implement:
    - kind: Property returning a short name for the tracker variant
    - get_tracked_item(): Capture state from a source object
    """

    @property
    @abstractmethod
    def kind(self) -> str:
        """Return the name of this tracker variant."""
        pass

    @abstractmethod
    def get_tracked_item(self, source: T) -> BaseTrackedItem[T, D]:
        """
        Capture the tracked state of a source object.

        Args:
            source: Object to capture state from

        Returns:
            Tracked item holding the captured state
        """
        pass


class PropertyTracker(BaseItemTracker[T, D], Generic[T, D, V]):
    """Tracks a single value selected from the source object."""

    def __init__(self, selector: Selector, difference_factory: DifferenceFactory):
        self._selector = selector
        self._difference_factory = difference_factory

    @property
    def kind(self) -> str:
        return "property"

    @property
    def selector(self) -> Selector:
        return self._selector

    @property
    def difference_factory(self) -> DifferenceFactory:
        return self._difference_factory

    def get_tracked_item(self, source: T) -> TrackedProperty[T, D, V]:
        return TrackedProperty(
            value=self._selector(source),
            selector=self._selector,
            difference_factory=self._difference_factory,
        )


class CollectionTracker(BaseItemTracker[T, D], Generic[T, D, I]):
    """Tracks the items of a collection, each through a nested tracker."""

    def __init__(
        self,
        items_selector: ItemsSelector,
        matching_predicate: MatchingPredicate,
        added_factory: Optional[ItemFactory],
        removed_factory: Optional[ItemFactory],
        item_tracker: "Tracker[I, D]",
    ):
        self._items_selector = items_selector
        self._matching_predicate = matching_predicate
        self._added_factory = added_factory
        self._removed_factory = removed_factory
        self._item_tracker = item_tracker

    @property
    def kind(self) -> str:
        return "collection"

    @property
    def item_tracker(self) -> "Tracker[I, D]":
        """Nested tracker applied to each collection item."""
        return self._item_tracker

    def get_tracked_item(self, source: T) -> TrackedCollection[T, D, I]:
        snapshots = tuple(self._item_tracker.track(item) for item in self._items_selector(source))

        return TrackedCollection(
            source=source,
            items_selector=self._items_selector,
            matching_predicate=self._matching_predicate,
            added_factory=self._added_factory,
            removed_factory=self._removed_factory,
            snapshots=snapshots,
        )
