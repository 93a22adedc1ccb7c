import threading

import pytest

from tableside import orders as lifecycle
from tableside.app import create_app
from tableside.store import MemoryRepository, get_store, memory_store


def test_memory_repository_returns_copies():
    repo = MemoryRepository()
    repo.add({"id": "a", "tags": ["x"]})
    doc = repo.get("a")
    doc["tags"].append("y")
    assert repo.get("a")["tags"] == ["x"]
    repo.save(doc)
    assert repo.get("a")["tags"] == ["x", "y"]


def test_memory_repository_basics():
    repo = MemoryRepository()
    for i in range(3):
        repo.add({"id": str(i), "n": i})
    with pytest.raises(KeyError):
        repo.add({"id": "1"})
    assert [d["id"] for d in repo.list()] == ["0", "1", "2"]
    assert repo.find(lambda d: d["n"] == 2)["id"] == "2"
    assert len(repo.filter(lambda d: d["n"] > 0)) == 2
    assert repo.delete("1") is True
    assert repo.delete("1") is False
    assert len(repo) == 2
    assert repo.get("missing") is None


def test_order_numbers_are_sequential():
    store = memory_store()
    first = lifecycle.create_order(store, {})
    second = lifecycle.create_order(store, {})
    assert (first.order_number, second.order_number) == ("ORD-001", "ORD-002")


def test_concurrent_adds_do_not_lose_updates():
    store = memory_store()
    order = lifecycle.create_order(store, {})
    item = {"productId": "p1", "name": "Shot", "price": 14}

    def worker():
        for _ in range(25):
            lifecycle.add_item(store, order.id, item)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    final = lifecycle.load_order(store, order.id)
    assert final.items[0].quantity == 100
    assert final.total == pytest.approx(1400.0)


@pytest.fixture
def sql_app():
    app = create_app(testing=True, config={"STORE_BACKEND": "sql"})
    with app.app_context():
        yield app


def test_sql_store_is_seeded_and_editable(sql_app):
    store = get_store()
    assert len(store.tables) == 3
    table = store.tables.find(lambda t: t["number"] == "101")
    table["status"] = "occupied"
    store.tables.save(table)
    assert store.tables.get(table["id"])["status"] == "occupied"
    assert [t["number"] for t in store.tables.list()] == ["101", "102", "103"]


def test_sql_store_serves_order_flow(sql_app):
    client = sql_app.test_client()
    order = client.post("/orders", json={}).get_json()
    item = {"productId": "p1", "name": "Grey Goose Vodka (Shot)", "price": 14, "quantity": 2}
    resp = client.post(f"/orders/{order['id']}/items", json=item)
    assert resp.get_json()["total"] == pytest.approx(28.0)
    assert get_store().orders.delete(order["id"]) is True
    assert client.get(f"/orders/{order['id']}").status_code == 404
