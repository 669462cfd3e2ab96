"""
Fluent builder for configuring reusable trackers.

The builder accumulates tracking rules in registration order. build()
validates them and freezes them into a TrackerConfig wrapped by a Tracker,
which can then snapshot any number of objects.

Example:
    tracker = (
        TrackerBuilder()
        .track_property(
            lambda person: person.name,
            lambda person, old, new: PropertyChange(property_name="name", old_value=old, new_value=new),
        )
        .track_collection(
            lambda person: person.addresses,
            lambda a, b: a.id == b.id,
            added_factory=lambda src, tgt, address: ItemAdded(collection_name="addresses", item=address),
            removed_factory=lambda src, tgt, address: ItemRemoved(collection_name="addresses", item=address),
            configure_item_tracker=lambda builder: builder.track_property(
                lambda address: address.city, make_city_change
            ),
        )
        .build()
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Union

from ..core.types import (
    D,
    DifferenceFactory,
    ItemFactory,
    ItemsSelector,
    MatchingPredicate,
    Selector,
    T,
)
from ..errors import InvalidConfigurationError
from .item_trackers import BaseItemTracker, CollectionTracker, PropertyTracker
from .tracker import Tracker, TrackerConfig

logger = logging.getLogger(__name__)


@dataclass
class _PropertyRule:
    """Pending property tracking rule."""

    selector: Any
    difference_factory: Any


@dataclass
class _CollectionRule:
    """Pending collection tracking rule."""

    items_selector: Any
    matching_predicate: Any
    added_factory: Any
    removed_factory: Any
    configure_item_tracker: Any
    item_builder: Any  # Whatever configure_item_tracker returned


_Rule = Union[_PropertyRule, _CollectionRule]


class TrackerBuilder(Generic[T, D]):
    """Accumulates tracking rules and builds Tracker instances."""

    def __init__(self) -> None:
        self._rules: List[_Rule] = []
        self._building = False

    def __len__(self) -> int:
        return len(self._rules)

    def track_property(
        self,
        selector: Selector,
        difference_factory: DifferenceFactory,
    ) -> "TrackerBuilder[T, D]":
        """
        Track a single value. Changes are detected with == equality.

        Args:
            selector: Extracts the value from a tracked object
            difference_factory: Called as (target, old_value, new_value) to
                create a difference when the value changed

        Returns:
            This builder, for chaining
        """
        self._rules.append(_PropertyRule(selector, difference_factory))
        logger.debug(f"Registered property tracker #{len(self._rules) - 1}")
        return self

    def track_collection(
        self,
        items_selector: ItemsSelector,
        matching_predicate: MatchingPredicate,
        added_factory: Optional[ItemFactory] = None,
        removed_factory: Optional[ItemFactory] = None,
        configure_item_tracker: Optional[Callable[["TrackerBuilder[Any, D]"], "TrackerBuilder[Any, D]"]] = None,
    ) -> "TrackerBuilder[T, D]":
        """
        Track a collection, matching items across versions with a predicate.

        Args:
            items_selector: Extracts the items from a tracked object. May
                return any iterable, including a generator.
            matching_predicate: Called as (captured_item, target_item); True
                when both represent the same entity (typically same id)
            added_factory: Called as (source, target, item) for target items
                with no captured counterpart. Additions are not reported when
                omitted.
            removed_factory: Called as (source, target, item) for captured
                items with no target counterpart. Removals are not reported
                when omitted.
            configure_item_tracker: Receives a fresh builder for the item type
                and returns it configured. Matched items are compared with the
                resulting tracker.

        Returns:
            This builder, for chaining
        """
        item_builder: Any = TrackerBuilder()
        if callable(configure_item_tracker):
            item_builder = configure_item_tracker(item_builder)

        self._rules.append(
            _CollectionRule(
                items_selector=items_selector,
                matching_predicate=matching_predicate,
                added_factory=added_factory,
                removed_factory=removed_factory,
                configure_item_tracker=configure_item_tracker,
                item_builder=item_builder,
            )
        )
        logger.debug(f"Registered collection tracker #{len(self._rules) - 1}")
        return self

    def build(self) -> Tracker[T, D]:
        """
        Validate the accumulated rules and create a reusable tracker.

        May be called repeatedly; every call returns an independent tracker
        with its own immutable configuration.

        Returns:
            Tracker applying the configured rules in registration order

        Raises:
            InvalidConfigurationError: If a required callable is missing or
                an optional one is not callable
        """
        self._building = True
        try:
            item_trackers = tuple(
                self._build_item_tracker(position, rule) for position, rule in enumerate(self._rules)
            )
        finally:
            self._building = False
        logger.debug(f"Built tracker with {len(item_trackers)} item tracker(s)")
        return Tracker(TrackerConfig(item_trackers))

    def _build_item_tracker(self, position: int, rule: _Rule) -> BaseItemTracker[T, D]:
        if isinstance(rule, _PropertyRule):
            _require_callable(rule.selector, "selector", position)
            _require_callable(rule.difference_factory, "difference_factory", position)
            return PropertyTracker(rule.selector, rule.difference_factory)

        _require_callable(rule.items_selector, "items_selector", position)
        _require_callable(rule.matching_predicate, "matching_predicate", position)
        _require_callable(rule.added_factory, "added_factory", position, optional=True)
        _require_callable(rule.removed_factory, "removed_factory", position, optional=True)
        _require_callable(rule.configure_item_tracker, "configure_item_tracker", position, optional=True)

        if not isinstance(rule.item_builder, TrackerBuilder):
            raise InvalidConfigurationError(
                "configure_item_tracker must return a TrackerBuilder, "
                f"got {type(rule.item_builder).__name__}",
                field="configure_item_tracker",
                position=position,
            )
        if rule.item_builder._building:
            raise InvalidConfigurationError(
                "configure_item_tracker returned a builder that contains this collection",
                field="configure_item_tracker",
                position=position,
            )

        return CollectionTracker(
            items_selector=rule.items_selector,
            matching_predicate=rule.matching_predicate,
            added_factory=rule.added_factory,
            removed_factory=rule.removed_factory,
            item_tracker=rule.item_builder.build(),
        )


def _require_callable(value: Any, field: str, position: int, optional: bool = False) -> None:
    """Raise InvalidConfigurationError unless value is callable (or None when optional)."""
    if value is None:
        if optional:
            return
        raise InvalidConfigurationError(f"{field} is required", field=field, position=position)
    if not callable(value):
        raise InvalidConfigurationError(
            f"{field} must be callable, got {type(value).__name__}",
            field=field,
            position=position,
        )
