"""
snaptrack models

Pydantic difference types and serializers for difference lists.

Usage:
    from snaptrack import TrackerBuilder
    from snaptrack.models import property_change, serialize_to_json

    tracker = TrackerBuilder().track_property(lambda p: p.name, property_change("name")).build()
    print(serialize_to_json(tracker.track(person).compare(other_person)))
"""

from .changes import (
    Change,
    ChangeType,
    GenericChange,
    ItemAdded,
    ItemRemoved,
    PropertyChange,
    item_added,
    item_removed,
    property_change,
    to_plain,
)
from .serializers import (
    difference_to_dict,
    differences_to_dicts,
    serialize_to_json,
    serialize_to_yaml,
)

__all__ = [
    # Types
    "ChangeType",
    "Change",
    "PropertyChange",
    "ItemAdded",
    "ItemRemoved",
    "GenericChange",
    # Factory helpers
    "property_change",
    "item_added",
    "item_removed",
    # Serialization
    "to_plain",
    "difference_to_dict",
    "differences_to_dicts",
    "serialize_to_json",
    "serialize_to_yaml",
]
