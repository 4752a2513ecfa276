# API tests - Categories & Products
#
# Tests for:
# - Category create/list/delete (deletion guard)
# - Product CRUD, search and payload validation
# - Error body shape and status mapping

import pytest


def _create_category(client, name="Boissons"):
    response = client.post("/api/categories", json={"name": name, "icon": "cup-soda"})
    assert response.status_code == 201
    return response.get_json()


def _create_product(client, category_id, **overrides):
    payload = {
        "name": "Cola 33cl",
        "categoryId": category_id,
        "stock": 12,
        "salePrice": 100,
        "purchasePrice": 60,
    }
    payload.update(overrides)
    response = client.post("/api/products", json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


class TestCategories:
    def test_create_and_list(self, client):
        created = _create_category(client)
        assert created["name"] == "Boissons"

        data = client.get("/api/categories").get_json()
        assert data["count"] == 1
        assert data["items"][0]["productCount"] == 0

    def test_create_requires_name(self, client):
        response = client.post("/api/categories", json={"icon": "x"})
        assert response.status_code == 400
        assert response.get_json()["code"] == "validation_error"

    def test_delete_guard(self, client):
        used = _create_category(client, "Used")
        unused = _create_category(client, "Unused")
        _create_product(client, used["id"])

        refused = client.delete(f"/api/categories/{used['id']}")
        assert refused.status_code == 409
        assert refused.get_json()["code"] == "category_in_use"

        removed = client.delete(f"/api/categories/{unused['id']}")
        assert removed.status_code == 200
        assert client.get("/api/categories").get_json()["count"] == 1

    def test_delete_unknown(self, client):
        response = client.delete("/api/categories/nope")
        assert response.status_code == 404


class TestProducts:
    def test_create_product(self, client):
        category = _create_category(client)
        product = _create_product(client, category["id"])

        assert product["totalSales"] == 0
        assert product["categoryId"] == category["id"]

        fetched = client.get(f"/api/products/{product['id']}").get_json()
        assert fetched["stockLevel"] == {"status": "ok", "percentage": 12.0}

    def test_create_product_missing_fields(self, client):
        response = client.post("/api/products", json={"name": "Incomplete"})
        assert response.status_code == 400
        assert "categoryId" in response.get_json()["details"]["missing"]

    @pytest.mark.parametrize("field,value", [
        ("stock", -1),
        ("stock", 1.5),
        ("stock", "1e3"),
        ("salePrice", -5),
        ("purchasePrice", "cheap"),
        ("name", "   "),
    ])
    def test_create_product_invalid_values(self, client, field, value):
        category = _create_category(client)
        payload = {
            "name": "Bad", "categoryId": category["id"], "stock": 1, "salePrice": 1, "purchasePrice": 1,
        }
        payload[field] = value
        response = client.post("/api/products", json=payload)
        assert response.status_code == 400

    def test_create_product_unknown_category(self, client):
        response = client.post("/api/products", json={
            "name": "Ghost", "categoryId": "nope", "stock": 1, "salePrice": 1, "purchasePrice": 1,
        })
        assert response.status_code == 404
        assert response.get_json()["code"] == "unknown_category"

    def test_search_and_filter(self, client):
        drinks = _create_category(client, "Drinks")
        snacks = _create_category(client, "Snacks")
        _create_product(client, drinks["id"], name="Cola")
        _create_product(client, snacks["id"], name="Cola chips", stock=0)
        _create_product(client, snacks["id"], name="Peanuts")

        names = lambda r: [p["name"] for p in r.get_json()["items"]]
        assert names(client.get("/api/products?q=cola")) == ["Cola", "Cola chips"]
        assert names(client.get(f"/api/products?q=cola&category_id={snacks['id']}")) == ["Cola chips"]
        assert names(client.get("/api/products?category_id=all")) == ["Cola", "Cola chips", "Peanuts"]
        assert names(client.get("/api/products/sellable")) == ["Cola", "Peanuts"]

    def test_update_is_full_replace(self, client):
        category = _create_category(client)
        product = _create_product(client, category["id"])

        response = client.put(f"/api/products/{product['id']}", json={
            "name": "Cola 50cl", "categoryId": category["id"], "stock": 3, "salePrice": 120, "purchasePrice": 70,
        })
        assert response.status_code == 200
        body = response.get_json()
        assert body["name"] == "Cola 50cl"
        assert body["stock"] == 3
        assert body["totalSales"] == 0

        # a direct stock edit is not a sale: no stock alert
        types = [n["type"] for n in client.get("/api/notifications").get_json()["items"]]
        assert "warning" not in types

    def test_update_missing_product(self, client):
        category = _create_category(client)
        response = client.put("/api/products/missing", json={
            "name": "X", "categoryId": category["id"], "stock": 1, "salePrice": 1, "purchasePrice": 1,
        })
        assert response.status_code == 404

    def test_delete_product(self, client):
        category = _create_category(client)
        product = _create_product(client, category["id"])

        assert client.delete(f"/api/products/{product['id']}").status_code == 200
        assert client.get(f"/api/products/{product['id']}").status_code == 404
        assert client.delete(f"/api/products/{product['id']}").status_code == 404


def _notification_types(client):
    return [n["type"] for n in client.get("/api/notifications").get_json()["items"]]


class TestProductRejectionAlerts:
    def test_invalid_create_is_alerted(self, client):
        category = _create_category(client)
        before = _notification_types(client)

        response = client.post("/api/products", json={
            "name": "Bad", "categoryId": category["id"], "stock": -1, "salePrice": 1, "purchasePrice": 1,
        })
        assert response.status_code == 400
        assert _notification_types(client) == ["error"] + before

    def test_incomplete_create_is_alerted(self, client):
        before = _notification_types(client)

        response = client.post("/api/products", json={"name": "Incomplete"})
        assert response.status_code == 400
        assert _notification_types(client) == ["error"] + before

    def test_update_of_missing_product_is_alerted(self, client):
        category = _create_category(client)
        before = _notification_types(client)

        response = client.put("/api/products/missing", json={
            "name": "X", "categoryId": category["id"], "stock": 1, "salePrice": 1, "purchasePrice": 1,
        })
        assert response.status_code == 404
        assert _notification_types(client) == ["error"] + before

    def test_invalid_update_is_alerted_and_changes_nothing(self, client):
        category = _create_category(client)
        product = _create_product(client, category["id"])
        before = _notification_types(client)

        response = client.put(f"/api/products/{product['id']}", json={
            "name": "Cola", "categoryId": category["id"], "stock": 1, "salePrice": -3, "purchasePrice": 1,
        })
        assert response.status_code == 400
        assert _notification_types(client) == ["error"] + before
        assert client.get(f"/api/products/{product['id']}").get_json()["salePrice"] == 100
