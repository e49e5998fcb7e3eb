"""Checkout API routes for the storefront service"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..core.errors import APIError, CheckoutInProgressError, EmptyCartError
from ..database.carts import CartSession
from ..models.checkout import CheckoutRequest, CheckoutResponse
from ..services.checkout import CheckoutService
from .cart import render_cart
from .dependencies import get_checkout_service, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkout", tags=["Checkout"])


@router.post("/{cart_id}", response_model=CheckoutResponse)
async def checkout(
    request: CheckoutRequest,
    session: CartSession = Depends(get_session),
    service: CheckoutService = Depends(get_checkout_service),
):
    """
    Place an order for the cart.

    The ordered lines leave the cart only after the storefront API has
    created the order; a failed order leaves it intact. A second checkout
    for the same cart while one is running gets 409.
    """
    summary = render_cart(session).summary

    try:
        order = await service.place_order(session, request.shipping)
    except CheckoutInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except APIError as e:
        logger.error(f"Checkout failed for cart {session.cart_id}: {e.message}")
        raise HTTPException(status_code=502, detail=e.message)

    return CheckoutResponse(
        success=True,
        summary=summary,
        order=order,
    )
