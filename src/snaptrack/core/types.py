"""
Type definitions shared by the configuration and snapshot layers.

T is the tracked object type, D the caller's difference type, V a property
value type and I a collection item type.
"""

from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")
D = TypeVar("D")
V = TypeVar("V")
I = TypeVar("I")  # noqa: E741

# Callback type definitions
Selector = Callable[[T], Optional[V]]
DifferenceFactory = Callable[[T, Optional[V], Optional[V]], D]
ItemsSelector = Callable[[T], Iterable[I]]
MatchingPredicate = Callable[[I, I], bool]
ItemFactory = Callable[[T, T, I], D]
