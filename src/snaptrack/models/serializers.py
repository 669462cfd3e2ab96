"""
Serialization utilities for difference lists.

Supports JSON and YAML output formats.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List

import yaml

from .changes import to_plain


def difference_to_dict(difference: Any) -> Any:
    """
    Convert a single difference to a plain dictionary.

    Objects exposing to_dict() use it. Dicts, dataclasses, Pydantic models and
    sequences are converted recursively; anything else is rendered with str().
    """
    to_dict = getattr(difference, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return to_plain(difference)


def differences_to_dicts(differences: Iterable[Any]) -> List[Any]:
    """Convert differences to JSON-compatible values, preserving order."""
    return [difference_to_dict(d) for d in differences]


def serialize_to_json(differences: Iterable[Any], indent: int = 2) -> str:
    """
    Serialize differences to a JSON array.

    Args:
        differences: Differences returned by Snapshot.compare()
        indent: JSON indentation level

    Returns:
        JSON string
    """
    return json.dumps(differences_to_dicts(differences), indent=indent, ensure_ascii=False)


def serialize_to_yaml(differences: Iterable[Any]) -> str:
    """
    Serialize differences to a YAML sequence.

    Args:
        differences: Differences returned by Snapshot.compare()

    Returns:
        YAML string
    """
    data = differences_to_dicts(differences)
    return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
