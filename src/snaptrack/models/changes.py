"""
Ready-made difference types as Pydantic models.

snaptrack never inspects difference values, so any type works as the
difference type of a tracker. These models cover the common cases and
serialize cleanly to JSON and YAML.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Callable, Dict, Literal, Optional

from pydantic import BaseModel, Field

# Extracts an identifier (id, name, ...) from the object a factory receives
OwnerSelector = Callable[[Any], Any]


class ChangeType(str, Enum):
    """Kind of change a difference describes."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


def to_plain(value: Any) -> Any:
    """Convert a value to JSON-compatible builtins, falling back to str()."""
    if isinstance(value, Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, BaseModel):
        return to_plain(value.model_dump())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_plain(dataclasses.asdict(value))
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_plain(v) for v in value]
    return str(value)


class Change(BaseModel):
    """Base model for all differences."""

    owner: Any = Field(default=None, description="Identifier of the object the change belongs to")

    model_config = {"frozen": True}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {name: to_plain(getattr(self, name)) for name in type(self).model_fields}

    def _prefix(self) -> str:
        return f"[{self.owner}] " if self.owner is not None else ""


class PropertyChange(Change):
    """A tracked property changed value (including None transitions)."""

    change_type: Literal[ChangeType.MODIFIED] = ChangeType.MODIFIED
    property_name: str
    old_value: Any = None
    new_value: Any = None

    def __str__(self) -> str:
        return f'{self._prefix()}{self.property_name} changed from "{self.old_value}" to "{self.new_value}"'


class ItemAdded(Change):
    """An item appeared in a tracked collection."""

    change_type: Literal[ChangeType.ADDED] = ChangeType.ADDED
    collection_name: str
    item: Any = None

    def __str__(self) -> str:
        return f"{self._prefix()}{self.collection_name}: added {self.item}"


class ItemRemoved(Change):
    """An item disappeared from a tracked collection."""

    change_type: Literal[ChangeType.REMOVED] = ChangeType.REMOVED
    collection_name: str
    item: Any = None

    def __str__(self) -> str:
        return f"{self._prefix()}{self.collection_name}: removed {self.item}"


class GenericChange(Change):
    """Free-form difference carrying only a message."""

    message: str

    def __str__(self) -> str:
        return f"{self._prefix()}{self.message}"


# =============================================================================
# Factory helpers
# =============================================================================


def property_change(property_name: str, owner: Optional[OwnerSelector] = None):
    """
    Create a difference factory for TrackerBuilder.track_property().

    Args:
        property_name: Name recorded in every PropertyChange
        owner: Optional callable extracting an identifier from the target

    Returns:
        Factory called as (target, old_value, new_value)
    """

    def factory(target: Any, old_value: Any, new_value: Any) -> PropertyChange:
        return PropertyChange(
            property_name=property_name,
            old_value=old_value,
            new_value=new_value,
            owner=owner(target) if owner is not None else None,
        )

    return factory


def item_added(collection_name: str, owner: Optional[OwnerSelector] = None):
    """Create an added_factory for TrackerBuilder.track_collection()."""

    def factory(source: Any, target: Any, item: Any) -> ItemAdded:
        return ItemAdded(
            collection_name=collection_name,
            item=item,
            owner=owner(target) if owner is not None else None,
        )

    return factory


def item_removed(collection_name: str, owner: Optional[OwnerSelector] = None):
    """Create a removed_factory for TrackerBuilder.track_collection()."""

    def factory(source: Any, target: Any, item: Any) -> ItemRemoved:
        return ItemRemoved(
            collection_name=collection_name,
            item=item,
            owner=owner(target) if owner is not None else None,
        )

    return factory
