"""Shared route dependencies"""

from typing import Optional

from fastapi import Depends, HTTPException

from ..core.config import settings
from ..database.carts import CartDatabase, CartSession, get_cart_db
from ..services.api_client import StorefrontAPIClient
from ..services.checkout import CheckoutService

# Created on first use (would be dependency injected in production)
api_client: Optional[StorefrontAPIClient] = None


def get_api_client() -> StorefrontAPIClient:
    """Get or create the storefront API client"""
    global api_client
    if api_client is None:
        api_client = StorefrontAPIClient(
            api_url=settings.api_url,
            api_token=settings.api_token,
            timeout=settings.request_timeout,
        )
    return api_client


def get_checkout_service(
    client: StorefrontAPIClient = Depends(get_api_client),
) -> CheckoutService:
    return CheckoutService(
        client=client,
        tax_rate=settings.tax_rate,
        shipping_fee=settings.shipping_fee,
    )


def get_session(
    cart_id: str,
    db: CartDatabase = Depends(get_cart_db),
) -> CartSession:
    """Resolve the cart session named in the path"""
    session = db.get_cart(cart_id)
    if not session:
        raise HTTPException(status_code=404, detail="Cart not found")
    session.touch()
    return session
