def test_categories_sorted_by_display_order(client):
    body = client.get("/menu/categories").get_json()
    assert body["success"] is True
    assert [c["id"] for c in body["data"]][:2] == ["spirits", "champagne"]


def test_category_lookup_and_products(client):
    assert client.get("/menu/categories/spirits").get_json()["data"]["name"] == "Spirits"
    resp = client.get("/menu/categories/nope")
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "error": "Category not found"}

    products = client.get("/menu/categories/spirits/products").get_json()["data"]
    assert {p["name"] for p in products} == {"Grey Goose Vodka", "Premium Vodka"}


def test_patch_category(client):
    body = client.patch("/menu/categories/bites", json={"isActive": False}).get_json()
    assert body["data"]["isActive"] is False


def test_update_product_and_inventory(client, grey_goose):
    product_id = grey_goose["productId"]
    body = client.put(f"/menu/products/{product_id}", json={"description": "Smooth"}).get_json()
    assert body["data"]["description"] == "Smooth"
    assert body["data"]["name"] == "Grey Goose Vodka"

    body = client.patch(f"/menu/products/{product_id}/inventory", json={"current": 0}).get_json()
    assert body["data"]["inventory"]["current"] == 0
    assert body["data"]["status"] == "out_of_stock"
    assert client.patch(f"/menu/products/{product_id}/inventory", json={"current": -3}).status_code == 400
    assert client.get("/menu/products/missing").status_code == 404


def test_staff_crud(client):
    resp = client.post("/staff", json={"firstName": "Sam", "lastName": "Lee", "role": "server", "sections": ["vip"]})
    assert resp.status_code == 201
    member = resp.get_json()
    assert member["isActive"] is True
    assert member["metrics"]["ordersServed"] == 0

    member = client.put(f"/staff/{member['id']}", json={"sections": ["vip", "bar"]}).get_json()
    assert member["sections"] == ["vip", "bar"]

    member = client.patch(f"/staff/{member['id']}/metrics", json={"ordersServed": 12}).get_json()
    assert member["metrics"]["ordersServed"] == 12
    assert member["metrics"]["averageRating"] == 0
    assert client.patch(f"/staff/{member['id']}/metrics", json={"tips": 1}).status_code == 400

    member = client.post(f"/staff/{member['id']}/deactivate").get_json()
    assert member["isActive"] is False
    assert member["status"] == "inactive"

    member = client.patch(f"/staff/{member['id']}/status", json={"status": "active"}).get_json()
    assert member["isActive"] is True


def test_staff_validation(client):
    assert client.post("/staff", json={"role": "dj"}).status_code == 400
    assert client.get("/staff/missing").status_code == 404
    assert client.post("/staff/missing/deactivate").status_code == 404


def test_venue_update(client, venue):
    resp = client.put(f"/venues/{venue['id']}", json={"dressCode": "Black tie", "id": "hijack"})
    body = resp.get_json()
    assert body["dressCode"] == "Black tie"
    assert body["id"] == venue["id"]
    assert client.get("/venues/missing").status_code == 404


def test_non_object_bodies_are_rejected(client, venue, grey_goose):
    resp = client.patch(f"/menu/products/{grey_goose['productId']}", json=[1])
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert client.patch("/menu/categories/spirits", json=[]).status_code == 400
    assert client.post("/staff", json=["bartender"]).status_code == 400
    assert client.put(f"/venues/{venue['id']}", json=[1]).status_code == 400
