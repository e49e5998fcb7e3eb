"""
Checkout Service

Hands a cart over to the storefront API as an order. The ordered lines
leave the cart only once the API has accepted the order.
"""

import logging
from decimal import Decimal
from typing import Any

from cartstore import CartState, OrderSummary, quantize_money, summarize

from ..core.errors import CheckoutInProgressError, EmptyCartError
from ..database.carts import CartSession
from ..models.checkout import ShippingInfo
from .api_client import StorefrontAPIClient

logger = logging.getLogger(__name__)


class CheckoutService:
    """Turns cart sessions into orders"""

    def __init__(
        self,
        client: StorefrontAPIClient,
        tax_rate: Decimal = Decimal("0.10"),
        shipping_fee: Decimal = Decimal("0"),
    ):
        self.client = client
        self.tax_rate = tax_rate
        self.shipping_fee = shipping_fee

    def summarize(self, state: CartState) -> OrderSummary:
        return summarize(state, tax_rate=self.tax_rate, shipping=self.shipping_fee)

    def build_payload(self, state: CartState, shipping: ShippingInfo) -> dict[str, Any]:
        """Order body sent to POST /orders"""
        summary = self.summarize(state)
        return {
            "items": [
                {
                    "listingId": line.product_id,
                    "name": line.product.name,
                    "quantity": line.quantity,
                    "unitPrice": str(line.product.price),
                    "totalPrice": str(quantize_money(line.line_total)),
                }
                for line in state.lines
            ],
            "shipping": shipping.model_dump(),
            "subtotal": str(quantize_money(summary.subtotal)),
            "shippingFee": str(quantize_money(summary.shipping)),
            "tax": str(quantize_money(summary.tax)),
            "total": str(quantize_money(summary.total)),
        }

    async def place_order(self, session: CartSession, shipping: ShippingInfo) -> dict[str, Any]:
        """
        Create an order for the session's cart.

        Only one checkout per session runs at a time. Once the order is
        created, exactly the ordered quantities leave the cart; lines
        added while the request was in flight stay.

        Raises:
            CheckoutInProgressError: if the session is already checking out
            EmptyCartError: if the cart has no lines
            APIError: if the storefront API rejects the order; the cart
                is left as it was
        """
        if session.checkout_in_progress:
            raise CheckoutInProgressError("Checkout already in progress")
        if session.store.is_empty:
            raise EmptyCartError("Cart is empty")

        session.checkout_in_progress = True
        try:
            ordered = session.store.state
            payload = self.build_payload(ordered, shipping)
            order = await self.client.create_order(payload)
            self._settle(session, ordered)
        finally:
            session.checkout_in_progress = False

        session.touch()
        logger.info(
            f"Order placed for cart {session.cart_id}: "
            f"{len(payload['items'])} lines, total {payload['total']}"
        )
        return order

    @staticmethod
    def _settle(session: CartSession, ordered: CartState) -> None:
        """Take the ordered lines out of the cart"""
        store = session.store
        if store.state is ordered:
            store.clear_cart()
            return

        for line in ordered.lines:
            remaining = store.quantity_of(line.product_id) - line.quantity
            if remaining > 0:
                store.update_quantity(line.product_id, remaining)
            else:
                store.remove_from_cart(line.product_id)
