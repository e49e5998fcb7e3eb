"""
Cart Store

Owns one cart's state and runs every mutation through the reducer.
Stock rejections are reported through the notification sink and
returned as outcomes; they are never raised.
"""

import logging
import threading
from decimal import Decimal
from typing import Optional

from .models import (
    EMPTY_CART,
    AddItem,
    CartCommand,
    CartLine,
    CartOutcome,
    CartState,
    ClearCart,
    OutcomeStatus,
    Product,
    RemoveItem,
    SetQuantity,
)
from .notifications import NotificationSink
from .reducer import decide

logger = logging.getLogger(__name__)


class CartStore:
    """
    Client-owned shopping cart.

    Usage:
        store = CartStore(sink=ToastQueue())
        outcome = store.add_to_cart(product)
        if not outcome.accepted:
            ...
        store.total, store.cart_count
    """

    def __init__(
        self,
        sink: Optional[NotificationSink] = None,
        state: CartState = EMPTY_CART,
    ):
        self.sink = sink
        self._state = state
        self._lock = threading.RLock()

    # ==================== Reads ====================

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def cart_items(self) -> tuple[CartLine, ...]:
        return self._state.lines

    @property
    def cart_count(self) -> int:
        return self._state.cart_count

    @property
    def total(self) -> Decimal:
        return self._state.total

    @property
    def is_empty(self) -> bool:
        return self._state.is_empty

    def quantity_of(self, product_id: str) -> int:
        return self._state.quantity_of(product_id)

    # ==================== Mutations ====================

    def dispatch(self, command: CartCommand) -> CartOutcome:
        """
        Apply a command, commit the new state and send its notification.

        The sink is called while the lock is held, so notifications reach
        it in the same order as the commits they describe.
        """
        with self._lock:
            outcome = decide(self._state, command)
            self._state = outcome.state

            if outcome.notification and self.sink is not None:
                self.sink.notify(outcome.notification.message, outcome.notification.kind)

        if outcome.status == OutcomeStatus.REJECTED:
            logger.info(f"Rejected {type(command).__name__}: {outcome.notification.message}")
        else:
            logger.debug(
                f"{type(command).__name__} -> {outcome.status.value} "
                f"({len(outcome.state.lines)} lines, {outcome.state.cart_count} units)"
            )

        return outcome

    def add_to_cart(self, product: Product) -> CartOutcome:
        """Add one unit of a product, bounded by its available stock"""
        return self.dispatch(AddItem(product))

    def update_quantity(self, product_id: str, quantity: int) -> CartOutcome:
        """
        Set a line to an absolute quantity.

        A quantity of zero or less removes the line. Unknown product ids
        are ignored.
        """
        return self.dispatch(SetQuantity(product_id, quantity))

    def remove_from_cart(self, product_id: str) -> CartOutcome:
        return self.dispatch(RemoveItem(product_id))

    def clear_cart(self) -> CartOutcome:
        return self.dispatch(ClearCart())

    def change_quantity(self, product: Product, new_quantity: int) -> CartOutcome:
        """
        Quantity picker helper.

        Callers compute `current ± 1` and hand over the target: below one
        removes the line, a product not yet in the cart is added, anything
        else is an absolute update.
        """
        if new_quantity < 1:
            return self.remove_from_cart(product.id)
        if self.quantity_of(product.id) == 0:
            return self.add_to_cart(product)
        return self.update_quantity(product.id, new_quantity)
