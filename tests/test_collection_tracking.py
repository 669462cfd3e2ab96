"""Tests for collection tracking: matching, additions, removals and nesting."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, List, Optional

import pytest

from snaptrack import Tracker, TrackerBuilder

# =============================================================================
# Test Models
# =============================================================================


@dataclass
class Product:
    id: int
    name: str
    price: Decimal


@dataclass
class ShoppingCart:
    products: List[Product] = field(default_factory=list)
    owner: Optional[str] = None


@dataclass(frozen=True)
class Difference:
    type: str
    data: Any = None


def added(src, tgt, item) -> Difference:
    return Difference("Added", item)


def removed(src, tgt, item) -> Difference:
    return Difference("Removed", item)


def same_id(a, b) -> bool:
    return a.id == b.id


def cart(*products: Product) -> ShoppingCart:
    return ShoppingCart(products=list(products))


APPLE = Product(1, "Apple", Decimal("1.50"))
BANANA = Product(2, "Banana", Decimal("0.80"))
ORANGE = Product(3, "Orange", Decimal("1.20"))

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fruit_cart() -> ShoppingCart:
    """Cart holding an Apple (id 1) and a Banana (id 2)."""
    return ShoppingCart(
        products=[
            Product(1, "Apple", Decimal("1.50")),
            Product(2, "Banana", Decimal("0.80")),
        ]
    )


@pytest.fixture
def membership_tracker() -> Tracker[ShoppingCart, Difference]:
    """Reports added and removed products only."""
    return (
        TrackerBuilder()
        .track_collection(
            lambda c: c.products,
            same_id,
            added_factory=added,
            removed_factory=removed,
            configure_item_tracker=lambda builder: builder,
        )
        .build()
    )


@pytest.fixture
def cart_tracker() -> Tracker[ShoppingCart, Difference]:
    """Reports added/removed products plus name and price changes."""
    return (
        TrackerBuilder()
        .track_collection(
            lambda c: c.products,
            same_id,
            added_factory=added,
            removed_factory=removed,
            configure_item_tracker=lambda builder: builder.track_property(
                lambda p: p.name,
                lambda p, old, new: Difference(f"NameChanged-{p.id}", (old, new)),
            ).track_property(
                lambda p: p.price,
                lambda p, old, new: Difference(f"PriceChanged-{p.id}", (old, new)),
            ),
        )
        .build()
    )


class TestMembershipChanges:
    """Tests for added and removed items."""

    def test_no_changes(self, membership_tracker, fruit_cart):
        """Unchanged collections report nothing."""
        snapshot = membership_tracker.track(fruit_cart)
        assert snapshot.current_differences() == []

    def test_item_added(self, membership_tracker):
        """A new target item is reported through added_factory."""
        snapshot = membership_tracker.track(cart(APPLE))
        differences = snapshot.compare(cart(APPLE, BANANA))
        assert differences == [Difference("Added", BANANA)]

    def test_item_removed(self, membership_tracker, fruit_cart):
        """A missing captured item is reported through removed_factory."""
        snapshot = membership_tracker.track(fruit_cart)
        differences = snapshot.compare(cart(Product(1, "Apple", Decimal("1.50"))))
        assert differences == [Difference("Removed", BANANA)]

    def test_removed_before_added(self, membership_tracker, fruit_cart):
        """Removals come from the first pass, additions from the trailing pass."""
        snapshot = membership_tracker.track(fruit_cart)
        differences = snapshot.compare(cart(APPLE, ORANGE))
        assert differences == [Difference("Removed", BANANA), Difference("Added", ORANGE)]

    def test_multiple_added_in_target_order(self, membership_tracker):
        """Additions follow target iteration order."""
        snapshot = membership_tracker.track(cart(APPLE))
        differences = snapshot.compare(cart(ORANGE, APPLE, BANANA))
        assert differences == [Difference("Added", ORANGE), Difference("Added", BANANA)]

    def test_empty_source(self, membership_tracker):
        """Everything in the target is added when nothing was captured."""
        snapshot = membership_tracker.track(cart())
        differences = snapshot.compare(cart(APPLE, BANANA))
        assert [d.type for d in differences] == ["Added", "Added"]

    def test_empty_target(self, membership_tracker, fruit_cart):
        """Everything captured is removed when the target is empty."""
        snapshot = membership_tracker.track(fruit_cart)
        differences = snapshot.compare(cart())
        assert differences == [Difference("Removed", APPLE), Difference("Removed", BANANA)]

    def test_without_added_factory(self):
        """Additions are silent when no added_factory is configured."""
        tracker = TrackerBuilder().track_collection(lambda c: c.products, same_id, removed_factory=removed).build()
        snapshot = tracker.track(cart(APPLE))
        assert snapshot.compare(cart(APPLE, BANANA)) == []

    def test_without_removed_factory(self):
        """Removals are silent when no removed_factory is configured."""
        tracker = TrackerBuilder().track_collection(lambda c: c.products, same_id, added_factory=added).build()
        snapshot = tracker.track(cart(APPLE, BANANA))
        assert snapshot.compare(cart(APPLE)) == []

    def test_factories_receive_source_and_target(self):
        """added/removed factories get the captured parent and the target."""
        calls = []

        def record(kind):
            def factory(src, tgt, item):
                calls.append((kind, src, tgt, item))
                return kind

            return factory

        tracker = (
            TrackerBuilder()
            .track_collection(lambda c: c.products, same_id, record("added"), record("removed"))
            .build()
        )
        source = cart(APPLE)
        target = cart(BANANA)
        tracker.track(source).compare(target)

        assert calls == [("removed", source, target, APPLE), ("added", source, target, BANANA)]
        assert calls[0][1] is source
        assert calls[0][2] is target


class TestNestedChanges:
    """Tests for recursion into matched items."""

    def test_nested_property_change(self, cart_tracker, fruit_cart):
        """A renamed matched item yields one nested difference and no add/remove."""
        snapshot = cart_tracker.track(fruit_cart)
        differences = snapshot.compare(cart(Product(1, "Granny Smith", Decimal("1.50")), BANANA))
        assert differences == [Difference("NameChanged-1", ("Apple", "Granny Smith"))]

    def test_nested_changes_on_multiple_items(self, cart_tracker, fruit_cart):
        """All matched items are compared, in captured order."""
        snapshot = cart_tracker.track(fruit_cart)
        differences = snapshot.compare(
            cart(
                Product(2, "Banana", Decimal("0.90")),
                Product(1, "Granny Smith Apple", Decimal("1.75")),
            )
        )
        assert [d.type for d in differences] == ["NameChanged-1", "PriceChanged-1", "PriceChanged-2"]

    def test_add_remove_and_modify(self, cart_tracker):
        """Nested and removal differences precede additions."""
        snapshot = cart_tracker.track(cart(APPLE, BANANA, ORANGE))
        grape = Product(4, "Grape", Decimal("2.00"))
        differences = snapshot.compare(cart(grape, Product(1, "Apple", Decimal("1.75")), ORANGE))

        assert differences == [
            Difference("PriceChanged-1", (Decimal("1.50"), Decimal("1.75"))),
            Difference("Removed", BANANA),
            Difference("Added", grape),
        ]

    def test_in_place_mutation(self, cart_tracker, fruit_cart):
        """current_differences() sees item edits, additions and removals on the live source."""
        snapshot = cart_tracker.track(fruit_cart)

        fruit_cart.products[0].price = Decimal("2.00")
        fruit_cart.products.append(ORANGE)
        del fruit_cart.products[1]

        differences = snapshot.current_differences()
        assert [d.type for d in differences] == ["PriceChanged-1", "Removed", "Added"]
        assert differences[1].data.name == "Banana"
        assert differences[2].data is ORANGE

    def test_two_levels_deep(self):
        """Collections of collections are tracked recursively."""

        @dataclass
        class Line:
            sku: str
            quantity: int

        @dataclass
        class Order:
            id: int
            lines: List[Line] = field(default_factory=list)

        @dataclass
        class Customer:
            orders: List[Order] = field(default_factory=list)

        tracker = (
            TrackerBuilder()
            .track_collection(
                lambda c: c.orders,
                lambda a, b: a.id == b.id,
                configure_item_tracker=lambda orders: orders.track_collection(
                    lambda o: o.lines,
                    lambda a, b: a.sku == b.sku,
                    added_factory=lambda o, _, line: f"order {o.id}: +{line.sku}",
                    configure_item_tracker=lambda lines: lines.track_property(
                        lambda line: line.quantity,
                        lambda line, old, new: f"{line.sku}: {old} -> {new}",
                    ),
                ),
            )
            .build()
        )

        customer = Customer([Order(1, [Line("A", 1)]), Order(2, [Line("B", 2)])])
        snapshot = tracker.track(customer)

        customer.orders[0].lines[0].quantity = 5
        customer.orders[1].lines.append(Line("C", 1))

        assert snapshot.current_differences() == ["A: 1 -> 5", "order 2: +C"]


class TestMatching:
    """Tests for the matching algorithm and its tie-break rules."""

    def test_generator_selector_is_materialized_once(self):
        """One-shot iterables work for both capture and comparison."""
        calls = {"count": 0}

        def products(c):
            calls["count"] += 1
            return (p for p in c.products)

        tracker = (
            TrackerBuilder()
            .track_collection(products, same_id, added_factory=added, removed_factory=removed)
            .build()
        )
        snapshot = tracker.track(cart(APPLE, BANANA))
        assert calls["count"] == 1

        differences = snapshot.compare(cart(BANANA, ORANGE))

        assert calls["count"] == 2
        assert differences == [Difference("Removed", APPLE), Difference("Added", ORANGE)]

    def test_duplicate_items_matched_by_index(self):
        """Equal duplicates are claimed one target slot at a time."""
        tracker = (
            TrackerBuilder()
            .track_collection(lambda c: c.products, lambda a, b: a == b, added, removed)
            .build()
        )
        snapshot = tracker.track(cart(APPLE, APPLE))

        assert snapshot.compare(cart(APPLE)) == [Difference("Removed", APPLE)]
        assert snapshot.compare(cart(APPLE, APPLE)) == []
        assert snapshot.compare(cart(APPLE, APPLE, APPLE)) == [Difference("Added", APPLE)]

    def test_first_unclaimed_match_wins(self):
        """With a predicate matching everything, items pair up in order."""
        pairs = []

        tracker = (
            TrackerBuilder()
            .track_collection(
                lambda c: c.products,
                lambda a, b: True,
                configure_item_tracker=lambda b: b.track_property(
                    lambda p: p.name,
                    lambda p, old, new: pairs.append((old, new)),
                ),
            )
            .build()
        )
        snapshot = tracker.track(cart(APPLE, BANANA))
        snapshot.compare(cart(Product(7, "X", Decimal("0")), Product(8, "Y", Decimal("0"))))

        assert pairs == [("Apple", "X"), ("Banana", "Y")]

    def test_predicate_argument_order(self):
        """The predicate receives (captured_item, target_item)."""
        seen = []

        def predicate(captured, candidate):
            seen.append((captured.name, candidate.name))
            return captured.id == candidate.id

        tracker = TrackerBuilder().track_collection(lambda c: c.products, predicate).build()
        tracker.track(cart(APPLE)).compare(cart(BANANA, APPLE))

        assert seen == [("Apple", "Banana"), ("Apple", "Apple")]

    def test_none_items_can_match(self):
        """A matched None target item is not mistaken for a missing match."""
        tracker = (
            TrackerBuilder()
            .track_collection(lambda c: c.products, lambda a, b: a is b, added, removed)
            .build()
        )
        snapshot = tracker.track(cart(None))
        assert snapshot.compare(cart(None)) == []
        assert snapshot.compare(cart()) == [Difference("Removed", None)]

    def test_predicate_error_propagates(self):
        """Exceptions from the predicate reach the caller of compare()."""

        def predicate(a, b):
            raise ValueError("bad predicate")

        tracker = TrackerBuilder().track_collection(lambda c: c.products, predicate).build()
        snapshot = tracker.track(cart(APPLE))

        with pytest.raises(ValueError, match="bad predicate"):
            snapshot.compare(cart(APPLE))
