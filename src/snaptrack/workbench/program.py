"""
Workbench program logic.

Tracks a Person, mutates it in place and prints the differences detected
by Snapshot.current_differences().
"""

import argparse
import logging
import os
import sys
from typing import Any, List, Optional

from ..core.constants import DEFAULT_LOG_LEVEL, ENV_VAR_LOG_LEVEL, LOG_FORMAT
from ..models import (
    GenericChange,
    item_added,
    item_removed,
    property_change,
    serialize_to_json,
    serialize_to_yaml,
)
from ..trackers.builder import TrackerBuilder
from ..trackers.tracker import Tracker
from .models import Address, Person

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging to stderr. --verbose wins over the env var."""
    level_name = "DEBUG" if verbose else os.environ.get(ENV_VAR_LOG_LEVEL, DEFAULT_LOG_LEVEL)
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_person_tracker() -> Tracker[Person, Any]:
    """Tracker watching name, age and the address list of a Person."""
    return (
        TrackerBuilder()
        .track_property(lambda person: person.name, property_change("name", owner=lambda p: p.id))
        .track_property(lambda person: person.age, property_change("age", owner=lambda p: p.id))
        .track_collection(
            lambda person: person.addresses,
            lambda a, b: a.id == b.id,
            added_factory=item_added("addresses", owner=lambda p: p.id),
            removed_factory=item_removed("addresses", owner=lambda p: p.id),
            configure_item_tracker=lambda builder: builder.track_property(
                lambda address: address.city,
                lambda address, old, new: GenericChange(
                    message=f'City changed from "{old}" to "{new}" for address {address.id}'
                ),
            ),
        )
        .build()
    )


def sample_person() -> Person:
    return Person(
        id=1,
        name="John",
        age=35,
        addresses=[
            Address(id=1, city="New York"),
            Address(id=2, city="London"),
            Address(id=3, city="Paris"),
        ],
    )


def run_demo() -> List[Any]:
    """Track a sample person, mutate it and return the detected differences."""
    tracker = build_person_tracker()
    person = sample_person()
    snapshot = tracker.track(person)

    person.name = "David"
    person.age = 36
    person.addresses[0].city = "Madrid"
    person.addresses.append(Address(id=4, city="Liverpool"))
    person.addresses = [a for a in person.addresses if a.id != 3]

    differences = snapshot.current_differences()
    logger.info(f"Detected {len(differences)} difference(s)")
    return differences


def render(differences: List[Any], output_format: str = "text") -> str:
    """Render differences as plain text lines, JSON or YAML."""
    if output_format == "json":
        return serialize_to_json(differences)
    if output_format == "yaml":
        return serialize_to_yaml(differences)
    return "\n".join(str(d) for d in differences)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the workbench program."""
    parser = argparse.ArgumentParser(
        prog="snaptrack-workbench",
        description="Track a sample object, mutate it and print the detected differences.",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json", "yaml"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    print(render(run_demo(), args.format))
    return 0
