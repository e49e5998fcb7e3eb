"""Checkout models for the storefront service"""

from typing import Any, Optional

from pydantic import BaseModel

from .cart import OrderSummaryView


class ShippingInfo(BaseModel):
    """Shipping details entered at checkout"""
    full_name: str
    email: str
    address: str
    city: str
    state: str
    zip_code: str
    country: str = "United States"


class CheckoutRequest(BaseModel):
    """Request to place an order for a cart"""
    shipping: ShippingInfo


class CheckoutResponse(BaseModel):
    """Response from checkout"""
    success: bool
    summary: Optional[OrderSummaryView] = None
    order: Optional[dict[str, Any]] = None
    error_message: Optional[str] = None
