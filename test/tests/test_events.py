def _events(socket_client, name):
    return [e["args"][0] for e in socket_client.get_received() if e["name"] == name]


def test_subscriber_receives_status_updates(client, socket_client, new_order):
    ack = socket_client.emit("subscribeToOrder", {"orderId": new_order["id"]}, callback=True)
    assert ack == {"ok": True}

    client.patch(f"/orders/{new_order['id']}/status", json={"status": "paid"})
    updates = _events(socket_client, "orderStatusUpdate")
    assert updates == [{"orderId": new_order["id"], "status": "paid", "orderNumber": new_order["orderNumber"]}]


def test_subscription_requires_order_id(socket_client):
    ack = socket_client.emit("subscribeToOrder", {}, callback=True)
    assert ack["ok"] is False


def test_unsubscribed_client_hears_nothing(client, socket_client, new_order):
    socket_client.emit("subscribeToOrder", {"orderId": new_order["id"]})
    socket_client.emit("unsubscribeFromOrder", {"orderId": new_order["id"]})
    client.patch(f"/orders/{new_order['id']}/status", json={"status": "paid"})
    assert _events(socket_client, "orderStatusUpdate") == []


def test_rejected_transition_is_not_pushed(client, socket_client, new_order):
    socket_client.emit("subscribeToOrder", {"orderId": new_order["id"]})
    client.patch(f"/orders/{new_order['id']}/status", json={"status": "completed"})
    assert _events(socket_client, "orderStatusUpdate") == []


def test_all_orders_subscription(client, socket_client, new_order):
    socket_client.emit("subscribeToAllOrders")
    snapshot = _events(socket_client, "allOrders")
    assert [o["id"] for o in snapshot[0]["orders"]] == [new_order["id"]]

    client.patch(f"/orders/{new_order['id']}/status", json={"status": "cancelled"})
    updates = _events(socket_client, "orderStatusUpdate")
    assert updates[0]["status"] == "cancelled"


def test_new_order_subscription(client, socket_client, venue, vip_table):
    socket_client.emit("subscribeToNewOrders")
    created = client.post("/orders", json={"venueId": venue["id"], "tableId": vip_table["id"]}).get_json()
    assert [o["id"] for o in _events(socket_client, "newOrder")] == [created["id"]]


def test_payment_pushes_paid_status(client, socket_client, new_order, grey_goose):
    client.post(f"/orders/{new_order['id']}/items", json=grey_goose)
    socket_client.emit("subscribeToOrder", {"orderId": new_order["id"]})
    client.post("/payments/process", json={"orderId": new_order["id"], "method": "card"})
    assert [u["status"] for u in _events(socket_client, "orderStatusUpdate")] == ["paid"]


def test_order_and_all_orders_subscriber_hears_update_once(client, socket_client, new_order):
    socket_client.emit("subscribeToOrder", {"orderId": new_order["id"]})
    socket_client.emit("subscribeToAllOrders")
    socket_client.get_received()

    client.patch(f"/orders/{new_order['id']}/status", json={"status": "paid"})
    assert [u["status"] for u in _events(socket_client, "orderStatusUpdate")] == ["paid"]
