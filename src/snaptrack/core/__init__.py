"""
snaptrack core module

Shared constants and callable type aliases.
"""

from .constants import DEFAULT_LOG_LEVEL, ENV_VAR_LOG_LEVEL, LOG_FORMAT
from .types import (
    DifferenceFactory,
    ItemFactory,
    ItemsSelector,
    MatchingPredicate,
    Selector,
)

__all__ = [
    # Constants
    "ENV_VAR_LOG_LEVEL",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    # Types
    "Selector",
    "DifferenceFactory",
    "ItemsSelector",
    "MatchingPredicate",
    "ItemFactory",
]
