def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"status": "ok"}


def test_unknown_route_is_json_404(client):
    r = client.get("/nope")
    assert r.status_code == 404
    assert "message" in r.get_json()


def test_seeded_collections(client):
    assert len(client.get("/venues").get_json()) == 1
    assert len(client.get("/tables").get_json()) == 3
    body = client.get("/menu/products").get_json()
    assert body["success"] is True
    assert any(p["name"] == "Grey Goose Vodka" for p in body["data"])
