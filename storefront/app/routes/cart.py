"""Cart API routes for the storefront service"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from cartstore import CartOutcome, quantize_money, summarize

from ..core.config import settings
from ..core.errors import APIError
from ..database.carts import CartDatabase, CartSession, get_cart_db
from ..models.cart import (
    Cart,
    CartLineView,
    CartResponse,
    OrderSummaryView,
    ToastView,
    UpdateCartItemRequest,
)
from ..models.product import ProductSnapshot
from ..services.api_client import StorefrontAPIClient
from .dependencies import get_api_client, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def render_cart(session: CartSession) -> Cart:
    """Build the API view of a cart session"""
    state = session.store.state
    summary = summarize(state, tax_rate=settings.tax_rate, shipping=settings.shipping_fee)
    return Cart(
        cart_id=session.cart_id,
        items=[CartLineView.from_line(line) for line in state.lines],
        cart_count=state.cart_count,
        total=state.total,
        summary=OrderSummaryView(
            subtotal=quantize_money(summary.subtotal),
            shipping=quantize_money(summary.shipping),
            tax=quantize_money(summary.tax),
            total=quantize_money(summary.total),
            item_count=summary.item_count,
        ),
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


def _respond(session: CartSession, outcome: CartOutcome) -> CartResponse:
    if outcome.changed:
        session.touch()
    return CartResponse.from_outcome(render_cart(session), outcome)


@router.post("", response_model=CartResponse)
async def create_cart(db: CartDatabase = Depends(get_cart_db)):
    """Create a new shopping cart"""
    session = db.create_cart()
    return CartResponse(cart=render_cart(session), message="Cart created")


@router.get("/{cart_id}", response_model=CartResponse)
async def get_cart(session: CartSession = Depends(get_session)):
    """Get cart by ID"""
    return CartResponse(cart=render_cart(session))


@router.post("/{cart_id}/items", response_model=CartResponse)
async def add_to_cart(
    product: ProductSnapshot,
    session: CartSession = Depends(get_session),
):
    """
    Add one unit of a product snapshot to the cart.

    Running out of stock is not an HTTP error: the response carries
    accepted=false and the notification text.
    """
    outcome = session.store.add_to_cart(product.to_product())
    return _respond(session, outcome)


@router.post("/{cart_id}/listings/{listing_id}", response_model=CartResponse)
async def add_listing_to_cart(
    listing_id: str,
    session: CartSession = Depends(get_session),
    client: StorefrontAPIClient = Depends(get_api_client),
):
    """Fetch a listing from the storefront API and add it to the cart"""
    try:
        product = await client.get_listing(listing_id)
    except APIError as e:
        status_code = 404 if e.status_code == 404 else 502
        raise HTTPException(status_code=status_code, detail=e.message)

    outcome = session.store.add_to_cart(product)
    return _respond(session, outcome)


@router.put("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    session: CartSession = Depends(get_session),
):
    """Set a line's quantity; zero or less removes the line"""
    outcome = session.store.update_quantity(product_id, request.quantity)
    return _respond(session, outcome)


@router.delete("/{cart_id}/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    product_id: str,
    session: CartSession = Depends(get_session),
):
    """Remove an item from the cart"""
    outcome = session.store.remove_from_cart(product_id)
    return _respond(session, outcome)


@router.delete("/{cart_id}/session", status_code=204)
async def delete_cart_session(
    cart_id: str,
    db: CartDatabase = Depends(get_cart_db),
):
    """Discard a cart session and everything it holds"""
    session = db.get_cart(cart_id)
    if not session:
        raise HTTPException(status_code=404, detail="Cart not found")
    if session.checkout_in_progress:
        raise HTTPException(status_code=409, detail="Checkout already in progress")
    db.delete_cart(cart_id)


@router.delete("/{cart_id}", response_model=CartResponse)
async def clear_cart(session: CartSession = Depends(get_session)):
    """Clear all items from cart"""
    outcome = session.store.clear_cart()
    return _respond(session, outcome)


@router.get("/{cart_id}/notifications", response_model=list[ToastView])
async def list_notifications(session: CartSession = Depends(get_session)):
    """Visible toasts for the cart, oldest first"""
    return [ToastView.from_toast(toast) for toast in session.toasts.toasts]


@router.delete("/{cart_id}/notifications/{toast_id}", status_code=204)
async def dismiss_notification(
    toast_id: str,
    session: CartSession = Depends(get_session),
):
    """Dismiss one toast"""
    if not session.toasts.dismiss(toast_id):
        raise HTTPException(status_code=404, detail="Notification not found")
