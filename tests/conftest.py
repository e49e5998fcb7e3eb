"""Shared fixtures for cart store and storefront service tests"""

from decimal import Decimal
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from cartstore import CallbackSink, CartStore, NotificationKind, Product, stock_limit


def make_product(
    product_id: str = "p1",
    price: str = "10",
    available: Optional[int] = 5,
    name: Optional[str] = None,
) -> Product:
    """Product snapshot with sensible defaults"""
    return Product(
        id=product_id,
        name=name or f"Product {product_id}",
        price=Decimal(price),
        stock=stock_limit(available),
    )


class RecordingSink:
    """Collects notifications instead of showing them"""

    def __init__(self):
        self.messages: list[tuple[str, NotificationKind]] = []

    def notify(self, message: str, kind: NotificationKind) -> None:
        self.messages.append((message, kind))

    @property
    def last(self) -> tuple[str, NotificationKind]:
        return self.messages[-1]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def store(sink: RecordingSink) -> CartStore:
    """Fresh store wired to a recording sink"""
    return CartStore(sink=CallbackSink(sink.notify))


@pytest.fixture
def cart_db():
    """
    Fixture providing a clean cart session storage.
    Toasts never expire so tests are not timing dependent.
    """
    from app.database.carts import CartDatabase

    return CartDatabase(toast_limit=5, toast_dismiss_seconds=None)


@pytest.fixture
def test_client(cart_db):
    """
    Fixture providing FastAPI TestClient backed by an isolated cart storage.
    """
    from app.main import app
    from app.database.carts import get_cart_db

    app.dependency_overrides[get_cart_db] = lambda: cart_db

    client = TestClient(app)
    yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
