"""Cart models for the storefront service"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from cartstore import CartLine, CartOutcome, NotificationKind, OutcomeStatus, Toast

from .product import ProductSnapshot


class CartLineView(BaseModel):
    """Line in a cart"""
    product: ProductSnapshot
    quantity: int = Field(ge=1)
    line_total: Decimal

    @classmethod
    def from_line(cls, line: CartLine) -> "CartLineView":
        return cls(
            product=ProductSnapshot.from_product(line.product),
            quantity=line.quantity,
            line_total=line.line_total,
        )


class OrderSummaryView(BaseModel):
    """Checkout figures, rounded to cents"""
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal
    item_count: int


class Cart(BaseModel):
    """Shopping cart"""
    cart_id: str
    items: list[CartLineView] = []
    cart_count: int = 0
    total: Decimal = Decimal("0")
    summary: OrderSummaryView
    created_at: datetime
    updated_at: datetime


class UpdateCartItemRequest(BaseModel):
    """Request to set a line's quantity; zero or less removes it"""
    quantity: int


class NotificationView(BaseModel):
    """Notification raised by a cart operation"""
    message: str
    kind: NotificationKind


class ToastView(NotificationView):
    """Notification waiting in a cart's toast queue"""
    id: str

    @classmethod
    def from_toast(cls, toast: Toast) -> "ToastView":
        return cls(id=toast.id, message=toast.message, kind=toast.kind)


class CartResponse(BaseModel):
    """Cart API response"""
    cart: Cart
    status: Optional[OutcomeStatus] = None
    accepted: bool = True
    notification: Optional[NotificationView] = None
    message: Optional[str] = None

    @classmethod
    def from_outcome(cls, cart: Cart, outcome: CartOutcome) -> "CartResponse":
        notification = None
        if outcome.notification:
            notification = NotificationView(
                message=outcome.notification.message,
                kind=outcome.notification.kind,
            )
        return cls(
            cart=cart,
            status=outcome.status,
            accepted=outcome.accepted,
            notification=notification,
            message=notification.message if notification else None,
        )
