"""Tests for the pure cart reducer"""

import random
from decimal import Decimal

import pytest

from cartstore import (
    EMPTY_CART,
    AddItem,
    CartState,
    ClearCart,
    NotificationKind,
    OutcomeStatus,
    RemoveItem,
    SetQuantity,
    apply,
    decide,
    replay,
)

from conftest import make_product


CATALOG = [
    make_product("bounded-1", price="4.99", available=1),
    make_product("bounded-3", price="12.50", available=3),
    make_product("sold-out", price="7", available=0),
    make_product("unlimited", price="0.10", available=None),
    make_product("free", price="0", available=10),
]


def random_command(rng: random.Random):
    product = rng.choice(CATALOG)
    roll = rng.random()
    if roll < 0.5:
        return AddItem(product)
    if roll < 0.75:
        return SetQuantity(product.id, rng.randint(-2, 6))
    if roll < 0.95:
        return RemoveItem(rng.choice([product.id, "unknown-id"]))
    return ClearCart()


def check_invariants(state: CartState) -> None:
    ids = [line.product_id for line in state.lines]
    assert len(ids) == len(set(ids))
    for line in state.lines:
        assert line.quantity >= 1
        assert line.product.stock.allows(line.quantity)
    assert state.cart_count == sum(line.quantity for line in state.lines)
    assert state.total == sum(
        (line.product.price * line.quantity for line in state.lines), Decimal("0")
    )


class TestDecide:

    def test_does_not_mutate_input_state(self):
        start = replay([AddItem(CATALOG[1])])

        decide(start, AddItem(CATALOG[1]))
        decide(start, SetQuantity("bounded-3", 3))
        decide(start, ClearCart())

        assert start.quantity_of("bounded-3") == 1

    def test_rejection_returns_same_state_object(self):
        start = replay([AddItem(CATALOG[0])])

        outcome = decide(start, AddItem(CATALOG[0]))

        assert outcome.status == OutcomeStatus.REJECTED
        assert outcome.state is start
        assert outcome.notification.kind == NotificationKind.ERROR

    def test_add_reports_success_notification(self):
        outcome = decide(EMPTY_CART, AddItem(CATALOG[3]))

        assert outcome.notification.message == "Product unlimited added to cart successfully!"
        assert outcome.notification.kind == NotificationKind.SUCCESS

    def test_update_uses_stock_of_stored_line(self):
        stored = make_product("p1", available=2)
        state = apply(EMPTY_CART, AddItem(stored))

        outcome = decide(state, SetQuantity("p1", 3))

        assert outcome.status == OutcomeStatus.REJECTED
        assert outcome.notification.message == "Only 2 items available in stock"

    def test_remove_and_clear_never_notify(self):
        state = replay([AddItem(CATALOG[1]), AddItem(CATALOG[3])])

        for command in (RemoveItem("bounded-3"), RemoveItem("nope"), SetQuantity("unlimited", 0), ClearCart()):
            outcome = decide(state, command)
            assert outcome.notification is None

    def test_unknown_command_raises(self):
        with pytest.raises(TypeError, match="Unknown cart command"):
            decide(EMPTY_CART, "ADD")


class TestApplyAndReplay:

    def test_replay_matches_stepwise_apply(self):
        commands = [
            AddItem(CATALOG[1]),
            AddItem(CATALOG[3]),
            AddItem(CATALOG[1]),
            SetQuantity("unlimited", 4),
            RemoveItem("bounded-3"),
        ]

        state = EMPTY_CART
        for command in commands:
            state = apply(state, command)

        assert replay(commands) == state
        assert [(l.product_id, l.quantity) for l in state.lines] == [("unlimited", 4)]

    def test_replay_from_existing_state(self):
        start = replay([AddItem(CATALOG[4])])

        state = replay([AddItem(CATALOG[4])], state=start)

        assert state.quantity_of("free") == 2
        assert state.total == Decimal("0")


@pytest.mark.parametrize("seed", range(25))
def test_random_command_sequences_keep_invariants(seed):
    rng = random.Random(seed)
    state = EMPTY_CART

    for _ in range(200):
        command = random_command(rng)
        outcome = decide(state, command)
        if outcome.status == OutcomeStatus.REJECTED:
            assert outcome.state == state
        state = outcome.state
        check_invariants(state)

    assert apply(apply(state, ClearCart()), ClearCart()) == EMPTY_CART
