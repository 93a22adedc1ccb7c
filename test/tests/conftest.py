"""
Project: Tableside
Description:
Shared fixtures: a fresh app with seeded mock data per test, its HTTP and
Socket.IO test clients, and a logged-in guest.
"""

import os
import sys

import pytest

# --- Make sure the project root is importable without installing ---
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tableside.app import create_app  # noqa: E402
from tableside.events import socketio  # noqa: E402
from tableside.store import get_store  # noqa: E402


@pytest.fixture
def app():
    app = create_app(testing=True)
    with app.app_context():
        yield app


@pytest.fixture
def store(app):
    return get_store()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app, client):
    sc = socketio.test_client(app, flask_test_client=client)
    yield sc
    if sc.is_connected():
        sc.disconnect()


@pytest.fixture
def auth_headers(client):
    resp = client.post("/auth/login", json={"email": "john@example.com", "password": "password"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture
def venue(store):
    return store.venues.list()[0]


def _table(store, number):
    return store.tables.find(lambda t: t["number"] == number)


@pytest.fixture
def vip_table(store):
    return _table(store, "101")


@pytest.fixture
def regular_table(store):
    return _table(store, "102")


@pytest.fixture
def grey_goose(store):
    product = store.products.find(lambda p: p["name"] == "Grey Goose Vodka")
    shot = next(s for s in product["sizes"] if s["name"] == "Shot")
    return {"productId": product["id"], "name": "Grey Goose Vodka (Shot)", "price": shot["currentPrice"], "size": shot}


@pytest.fixture
def new_order(client, venue, regular_table):
    resp = client.post("/orders", json={"venueId": venue["id"], "tableId": regular_table["id"], "type": "table"})
    assert resp.status_code == 201
    return resp.get_json()
