"""
Cart Reducer

Pure decision logic for the cart. Every command goes through decide(),
which returns the next state together with the notification the store
should surface. Nothing here mutates its inputs or performs I/O.
"""

from typing import Iterable

from . import messages
from .models import (
    EMPTY_CART,
    AddItem,
    CartCommand,
    CartLine,
    CartOutcome,
    CartState,
    ClearCart,
    Notification,
    NotificationKind,
    OutcomeStatus,
    RemoveItem,
    SetQuantity,
)


def _rejected(state: CartState, message: str) -> CartOutcome:
    return CartOutcome(
        status=OutcomeStatus.REJECTED,
        state=state,
        notification=Notification(message, NotificationKind.ERROR),
    )


def _add(state: CartState, command: AddItem) -> CartOutcome:
    product = command.product
    existing = state.find(product.id)
    requested = (existing.quantity if existing else 0) + 1

    # Checked against the snapshot passed in, not the one stored on the line
    if not product.stock.allows(requested):
        return _rejected(
            state,
            messages.out_of_stock_on_add(product.stock.available, product.name),
        )

    if existing is None:
        return CartOutcome(
            status=OutcomeStatus.ADDED,
            state=CartState(state.lines + (CartLine(product, 1),)),
            notification=Notification(messages.added_to_cart(product.name), NotificationKind.SUCCESS),
        )

    lines = tuple(
        CartLine(line.product, requested) if line is existing else line
        for line in state.lines
    )
    return CartOutcome(
        status=OutcomeStatus.UPDATED,
        state=CartState(lines),
        notification=Notification(messages.quantity_updated(product.name), NotificationKind.SUCCESS),
    )


def _remove(state: CartState, command: RemoveItem) -> CartOutcome:
    if state.find(command.product_id) is None:
        return CartOutcome(status=OutcomeStatus.UNCHANGED, state=state)

    lines = tuple(line for line in state.lines if line.product_id != command.product_id)
    return CartOutcome(status=OutcomeStatus.REMOVED, state=CartState(lines))


def _set_quantity(state: CartState, command: SetQuantity) -> CartOutcome:
    if command.quantity <= 0:
        return _remove(state, RemoveItem(command.product_id))

    existing = state.find(command.product_id)
    if existing is None:
        return CartOutcome(status=OutcomeStatus.UNCHANGED, state=state)

    stock = existing.product.stock
    if not stock.allows(command.quantity):
        return _rejected(state, messages.out_of_stock_on_update(stock.available))

    lines = tuple(
        CartLine(line.product, command.quantity) if line is existing else line
        for line in state.lines
    )
    return CartOutcome(status=OutcomeStatus.UPDATED, state=CartState(lines))


def _clear(state: CartState, command: ClearCart) -> CartOutcome:
    if state.is_empty:
        return CartOutcome(status=OutcomeStatus.UNCHANGED, state=EMPTY_CART)
    return CartOutcome(status=OutcomeStatus.CLEARED, state=EMPTY_CART)


_HANDLERS = {
    AddItem: _add,
    RemoveItem: _remove,
    SetQuantity: _set_quantity,
    ClearCart: _clear,
}


def decide(state: CartState, command: CartCommand) -> CartOutcome:
    """Work out what a command does to a cart state"""
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown cart command: {command!r}")
    return handler(state, command)


def apply(state: CartState, command: CartCommand) -> CartState:
    """Next state after a command"""
    return decide(state, command).state


def replay(commands: Iterable[CartCommand], state: CartState = EMPTY_CART) -> CartState:
    """Fold a sequence of commands over a starting state"""
    for command in commands:
        state = apply(state, command)
    return state
