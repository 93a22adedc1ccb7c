def test_reserve_available_table(client, regular_table):
    payload = {"id": "res-1", "userId": "u-1", "minimumSpend": 0, "specialRequests": "birthday"}
    resp = client.post(f"/tables/{regular_table['id']}/reservations", json=payload)
    assert resp.status_code == 200
    table = resp.get_json()
    assert table["status"] == "reserved"
    assert table["reservation"] == payload


def test_reservation_gets_an_id_when_missing(client, regular_table):
    table = client.post(f"/tables/{regular_table['id']}/reservations", json={"userId": "u-1"}).get_json()
    assert table["reservation"]["id"]


def test_cannot_reserve_a_non_available_table(client, regular_table):
    url = f"/tables/{regular_table['id']}/reservations"
    client.post(url, json={"id": "res-1"})
    resp = client.post(url, json={"id": "res-2"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Table is not available"


def test_cannot_reserve_table_under_maintenance(client, vip_table):
    client.patch(f"/tables/{vip_table['id']}/status", json={"status": "maintenance"})
    resp = client.post(f"/tables/{vip_table['id']}/reservations", json={"id": "res-1"})
    assert resp.status_code == 400


def test_cancel_with_wrong_id_is_404(client, regular_table):
    client.post(f"/tables/{regular_table['id']}/reservations", json={"id": "res-1"})
    resp = client.delete(f"/tables/{regular_table['id']}/reservations/res-2")
    assert resp.status_code == 404
    table = client.get(f"/tables/{regular_table['id']}").get_json()
    assert table["status"] == "reserved"


def test_cancel_matching_reservation_frees_table(client, regular_table):
    client.post(f"/tables/{regular_table['id']}/reservations", json={"id": "res-1"})
    resp = client.delete(f"/tables/{regular_table['id']}/reservations/res-1")
    assert resp.status_code == 200
    table = resp.get_json()
    assert table["status"] == "available"
    assert table["reservation"] is None


def test_cancel_without_reservation_is_404(client, regular_table):
    assert client.delete(f"/tables/{regular_table['id']}/reservations/res-1").status_code == 404


def test_unknown_table(client):
    assert client.get("/tables/missing").status_code == 404
    assert client.post("/tables/missing/reservations", json={}).status_code == 404


def test_status_update_validates_value(client, regular_table):
    resp = client.patch(f"/tables/{regular_table['id']}/status", json={"status": "occupied"})
    assert resp.get_json()["status"] == "occupied"
    resp = client.patch(f"/tables/{regular_table['id']}/status", json={"status": "on-fire"})
    assert resp.status_code == 400


def test_tables_by_venue(client, venue):
    assert len(client.get(f"/tables/venue/{venue['id']}").get_json()) == 3
    assert client.get("/tables/venue/elsewhere").get_json() == []


def test_service_request_lifecycle(client, regular_table):
    url = f"/tables/{regular_table['id']}/service-requests"
    resp = client.post(url, json={"type": "ice"})
    assert resp.status_code == 201
    created = resp.get_json()
    assert created["status"] == "pending"

    assert [r["id"] for r in client.get(url).get_json()] == [created["id"]]

    resp = client.patch(f"{url}/{created['id']}", json={"status": "completed"})
    assert resp.get_json()["status"] == "completed"
    assert client.patch(f"{url}/{created['id']}", json={"status": "ignored"}).status_code == 400
    assert client.post(url, json={}).status_code == 400


def test_status_update_cannot_reserve(client, regular_table):
    resp = client.patch(f"/tables/{regular_table['id']}/status", json={"status": "reserved"})
    assert resp.status_code == 400
    table = client.get(f"/tables/{regular_table['id']}").get_json()
    assert table["status"] == "available"


def test_numeric_reservation_id_can_be_cancelled(client, regular_table):
    table = client.post(f"/tables/{regular_table['id']}/reservations", json={"id": 5}).get_json()
    assert table["reservation"]["id"] == "5"
    resp = client.delete(f"/tables/{regular_table['id']}/reservations/5")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "available"


def test_non_object_bodies_are_rejected(client, regular_table):
    url = f"/tables/{regular_table['id']}"
    assert client.post(f"{url}/reservations", json=[]).status_code == 400
    assert client.patch(f"{url}/status", json=["occupied"]).status_code == 400
    assert client.post(f"{url}/service-requests", json=[1]).status_code == 400
    assert client.get(url).get_json()["status"] == "available"
