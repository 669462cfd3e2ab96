"""
Captured state for a single configured item tracker.

A tracked item is created by an item tracker at track() time and holds the
frozen state needed to compute differences later:

- TrackedProperty: the selected value
- TrackedCollection: one nested Snapshot per item present at capture time
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, List, Optional, Sequence, Set, Tuple

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

if TYPE_CHECKING:
    from .snapshot import Snapshot

logger = logging.getLogger(__name__)


class BaseTrackedItem(ABC, Generic[T, D]):
    """
    Base class for captured item state.

    Subclasses must implement get_differences(), which compares the frozen
    state against a target object and returns zero or more differences.
    """

    @abstractmethod
    def get_differences(self, target: T) -> List[D]:
        """
        Compare captured state against a target object.

        Args:
            target: Object of the tracked type to compare against

        Returns:
            List of differences, in the order they were detected
        """
        pass


class TrackedProperty(BaseTrackedItem[T, D], Generic[T, D, V]):
    """Frozen value of a single tracked property."""

    def __init__(
        self,
        value: Optional[V],
        selector: Selector,
        difference_factory: DifferenceFactory,
    ):
        self._value = value
        self._selector = selector
        self._difference_factory = difference_factory

    @property
    def value(self) -> Optional[V]:
        """The value captured at tracking time."""
        return self._value

    def get_differences(self, target: T) -> List[D]:
        old_value = self._value
        new_value = self._selector(target)

        if old_value is None and new_value is None:
            return []
        if old_value is not None and new_value is not None and old_value == new_value:
            return []

        # Unequal values, or a None <-> value transition
        return [self._difference_factory(target, old_value, new_value)]

    def __repr__(self) -> str:
        return f"TrackedProperty(value={self._value!r})"


class TrackedCollection(BaseTrackedItem[T, D], Generic[T, D, I]):
    """
    Frozen snapshots of the items of a tracked collection.

    Matching rules:
    - Captured items are processed in their original order.
    - Each captured item claims the first unclaimed target item accepted by
      the matching predicate. Matched pairs are compared recursively.
    - Unmatched captured items are reported through removed_factory.
    - Unclaimed target items are reported through added_factory, after all
      matched/removed differences.
    """

    def __init__(
        self,
        source: T,
        items_selector: ItemsSelector,
        matching_predicate: MatchingPredicate,
        added_factory: Optional[ItemFactory],
        removed_factory: Optional[ItemFactory],
        snapshots: Tuple["Snapshot[I, D]", ...],
    ):
        self._source = source
        self._items_selector = items_selector
        self._matching_predicate = matching_predicate
        self._added_factory = added_factory
        self._removed_factory = removed_factory
        self._snapshots = snapshots

    @property
    def snapshots(self) -> Tuple["Snapshot[I, D]", ...]:
        """Nested snapshots, one per item present at tracking time."""
        return self._snapshots

    def get_differences(self, target: T) -> List[D]:
        # Materialize once: the selector may return a one-shot iterator
        target_items = list(self._items_selector(target))
        claimed: Set[int] = set()
        differences: List[D] = []

        # First pass: match captured items against target items
        for snapshot in self._snapshots:
            index = self._find_match(snapshot.source, target_items, claimed)

            if index is not None:
                claimed.add(index)
                differences.extend(snapshot.compare(target_items[index]))
            elif self._removed_factory is not None:
                differences.append(self._removed_factory(self._source, target, snapshot.source))

        # Second pass: target items nobody claimed are additions
        if self._added_factory is not None:
            for index, item in enumerate(target_items):
                if index not in claimed:
                    differences.append(self._added_factory(self._source, target, item))

        logger.debug(
            f"Collection compare: {len(self._snapshots)} captured, "
            f"{len(target_items)} target, {len(claimed)} matched"
        )
        return differences

    def _find_match(self, item: Any, target_items: Sequence[Any], claimed: Set[int]) -> Optional[int]:
        """Return the lowest unclaimed index whose item matches, or None."""
        for index, candidate in enumerate(target_items):
            if index in claimed:
                continue
            if self._matching_predicate(item, candidate):
                return index
        return None

    def __repr__(self) -> str:
        return f"TrackedCollection(items={len(self._snapshots)})"
