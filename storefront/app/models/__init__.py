# Storefront Models

from .product import ProductSnapshot
from .cart import (
    Cart,
    CartLineView,
    CartResponse,
    NotificationView,
    OrderSummaryView,
    ToastView,
    UpdateCartItemRequest,
)
from .checkout import CheckoutRequest, CheckoutResponse, ShippingInfo

__all__ = [
    "ProductSnapshot",
    "Cart",
    "CartLineView",
    "CartResponse",
    "NotificationView",
    "OrderSummaryView",
    "ToastView",
    "UpdateCartItemRequest",
    "CheckoutRequest",
    "CheckoutResponse",
    "ShippingInfo",
]
