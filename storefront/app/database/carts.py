"""Cart session storage for the storefront service"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from cartstore import CartStore, FanOutSink, LoggingSink, ToastQueue

from ..core.config import settings

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CartSession:
    """One shopper's cart and the toasts it has raised"""
    cart_id: str
    store: CartStore
    toasts: ToastQueue
    created_at: datetime
    updated_at: datetime = field(default_factory=utcnow)
    checkout_in_progress: bool = False

    def touch(self) -> None:
        self.updated_at = utcnow()


class CartDatabase:
    """
    In-memory cart session storage.

    Sessions untouched for `idle_hours` are swept whenever a new cart is
    created, and periodically by the app lifespan task.
    """

    def __init__(
        self,
        toast_limit: int = settings.toast_limit,
        toast_dismiss_seconds: Optional[float] = settings.toast_dismiss_seconds,
        idle_hours: float = settings.cart_idle_hours,
    ):
        self.carts: dict[str, CartSession] = {}
        self.toast_limit = toast_limit
        self.toast_dismiss_seconds = toast_dismiss_seconds
        self.idle_hours = idle_hours

    def create_cart(self) -> CartSession:
        """Create a new, empty cart session"""
        self.cleanup_idle()

        now = utcnow()
        toasts = ToastQueue(limit=self.toast_limit, dismiss_after=self.toast_dismiss_seconds)
        session = CartSession(
            cart_id=str(uuid.uuid4()),
            store=CartStore(sink=FanOutSink(toasts, LoggingSink())),
            toasts=toasts,
            created_at=now,
            updated_at=now,
        )
        self.carts[session.cart_id] = session
        return session

    def get_cart(self, cart_id: str) -> Optional[CartSession]:
        """Get a cart session by ID"""
        return self.carts.get(cart_id)

    def get_or_create_cart(self, cart_id: Optional[str] = None) -> CartSession:
        """Get existing cart session or create new one"""
        if cart_id and cart_id in self.carts:
            return self.carts[cart_id]
        return self.create_cart()

    def delete_cart(self, cart_id: str) -> bool:
        """Delete a cart session"""
        if cart_id in self.carts:
            del self.carts[cart_id]
            return True
        return False

    def cleanup_idle(self, max_age_hours: Optional[float] = None) -> int:
        """Remove sessions untouched for longer than max_age_hours"""
        if max_age_hours is None:
            max_age_hours = self.idle_hours
        now = utcnow()
        idle = [
            cart_id for cart_id, session in self.carts.items()
            if not session.checkout_in_progress
            and (now - session.updated_at).total_seconds() > max_age_hours * 3600
        ]
        for cart_id in idle:
            del self.carts[cart_id]
        if idle:
            logger.info(f"Removed {len(idle)} idle cart sessions")
        return len(idle)


# Singleton instance
cart_db = CartDatabase()


def get_cart_db() -> CartDatabase:
    """Dependency hook for the cart session storage"""
    return cart_db
