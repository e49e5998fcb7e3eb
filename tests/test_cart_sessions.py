"""Tests for cart session storage"""

import asyncio
import time
from datetime import datetime, timedelta, timezone

from cartstore import NotificationKind
from fastapi.testclient import TestClient

from app.database.carts import CartDatabase
from app.main import sweep_idle_carts

from conftest import make_product


def test_create_and_get(cart_db):
    session = cart_db.create_cart()

    assert cart_db.get_cart(session.cart_id) is session
    assert session.store.is_empty


def test_get_or_create_reuses_known_id(cart_db):
    session = cart_db.create_cart()

    assert cart_db.get_or_create_cart(session.cart_id) is session
    assert cart_db.get_or_create_cart("unknown").cart_id != session.cart_id
    assert cart_db.get_or_create_cart(None) is not session


def test_delete_cart(cart_db):
    session = cart_db.create_cart()

    assert cart_db.delete_cart(session.cart_id) is True
    assert cart_db.delete_cart(session.cart_id) is False
    assert cart_db.get_cart(session.cart_id) is None


def test_sessions_have_separate_carts_and_toasts(cart_db):
    first = cart_db.create_cart()
    second = cart_db.create_cart()

    first.store.add_to_cart(make_product("p1"))

    assert first.store.cart_count == 1
    assert second.store.is_empty
    assert [t.kind for t in first.toasts.toasts] == [NotificationKind.SUCCESS]
    assert second.toasts.toasts == []


def test_cleanup_idle(cart_db):
    stale = cart_db.create_cart()
    fresh = cart_db.create_cart()
    stale.updated_at = datetime.now(timezone.utc) - timedelta(hours=30)

    removed = cart_db.cleanup_idle(max_age_hours=24)

    assert removed == 1
    assert cart_db.get_cart(stale.cart_id) is None
    assert cart_db.get_cart(fresh.cart_id) is fresh


def test_cleanup_idle_defaults_to_configured_age():
    db = CartDatabase(toast_dismiss_seconds=None, idle_hours=1)
    stale = db.create_cart()
    stale.updated_at = datetime.now(timezone.utc) - timedelta(hours=2)

    assert db.cleanup_idle() == 1
    assert db.carts == {}


def test_cleanup_idle_keeps_session_mid_checkout(cart_db):
    session = cart_db.create_cart()
    session.updated_at = datetime.now(timezone.utc) - timedelta(hours=30)
    session.checkout_in_progress = True

    assert cart_db.cleanup_idle(max_age_hours=24) == 0
    assert cart_db.get_cart(session.cart_id) is session


def test_create_cart_sweeps_idle_sessions(cart_db):
    stale = cart_db.create_cart()
    stale.updated_at = datetime.now(timezone.utc) - timedelta(hours=cart_db.idle_hours + 1)

    fresh = cart_db.create_cart()

    assert list(cart_db.carts) == [fresh.cart_id]


def test_sweeper_task_removes_idle_sessions(cart_db):
    stale = cart_db.create_cart()
    stale.updated_at = datetime.now(timezone.utc) - timedelta(hours=cart_db.idle_hours + 1)

    async def run_sweeper():
        task = asyncio.create_task(sweep_idle_carts(cart_db, 0.01))
        await asyncio.sleep(0.05)
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    asyncio.run(run_sweeper())

    assert cart_db.carts == {}


class TestSessionRoutes:

    def test_create_cart_route_sweeps_idle_sessions(self, test_client: TestClient, cart_db):
        stale_id = test_client.post("/api/cart").json()["cart"]["cart_id"]
        cart_db.get_cart(stale_id).updated_at = (
            datetime.now(timezone.utc) - timedelta(hours=cart_db.idle_hours + 1)
        )

        fresh_id = test_client.post("/api/cart").json()["cart"]["cart_id"]

        assert test_client.get(f"/api/cart/{stale_id}").status_code == 404
        assert list(cart_db.carts) == [fresh_id]

    def test_reading_a_cart_keeps_it_alive(self, test_client: TestClient, cart_db):
        cart_id = test_client.post("/api/cart").json()["cart"]["cart_id"]
        old = datetime.now(timezone.utc) - timedelta(hours=cart_db.idle_hours - 1)
        cart_db.get_cart(cart_id).updated_at = old

        test_client.get(f"/api/cart/{cart_id}")

        assert cart_db.get_cart(cart_id).updated_at > old

    def test_delete_session(self, test_client: TestClient, cart_db):
        cart_id = test_client.post("/api/cart").json()["cart"]["cart_id"]
        test_client.post(f"/api/cart/{cart_id}/items", json={"id": "p1", "name": "Mug", "price": 10})

        response = test_client.delete(f"/api/cart/{cart_id}/session")

        assert response.status_code == 204
        assert cart_db.carts == {}
        assert test_client.get(f"/api/cart/{cart_id}").status_code == 404

    def test_delete_unknown_session_is_404(self, test_client: TestClient):
        response = test_client.delete("/api/cart/missing/session")

        assert response.status_code == 404

    def test_delete_session_mid_checkout_is_409(self, test_client: TestClient, cart_db):
        cart_id = test_client.post("/api/cart").json()["cart"]["cart_id"]
        cart_db.get_cart(cart_id).checkout_in_progress = True

        response = test_client.delete(f"/api/cart/{cart_id}/session")

        assert response.status_code == 409
        assert cart_db.get_cart(cart_id) is not None

    def test_lifespan_runs_sweeper(self, cart_db, monkeypatch):
        from app.core.config import settings
        from app.database.carts import get_cart_db
        from app.main import app

        monkeypatch.setattr(settings, "cart_sweep_interval_seconds", 0.01)
        stale = cart_db.create_cart()
        stale.updated_at = datetime.now(timezone.utc) - timedelta(hours=cart_db.idle_hours + 1)
        app.dependency_overrides[get_cart_db] = lambda: cart_db
        try:
            with TestClient(app) as client:
                time.sleep(0.2)
                assert client.get("/health").status_code == 200
        finally:
            app.dependency_overrides.clear()

        assert cart_db.get_cart(stale.cart_id) is None
