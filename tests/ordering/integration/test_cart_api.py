"""Integration tests for the cart endpoints."""

import pytest
from protean.core.repository import BaseRepository
from protean.exceptions import DatabaseError

HEADERS = {"X-User-Id": "user-001"}


@pytest.fixture()
def product_id(make_product):
    return make_product(name="Mug", price=5.0, stock=10).id


def _lines(response):
    return [(item["product_id"], item["quantity"], item["price"]) for item in response.json()["items"]]


class TestAuthentication:
    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/cart"),
            ("post", "/cart"),
            ("put", "/cart/prod-001"),
            ("delete", "/cart/prod-001"),
            ("delete", "/cart"),
        ],
    )
    def test_missing_user_is_unauthorized(self, client, method, path):
        response = client.request(method.upper(), path, json={"product_id": "prod-001", "quantity": 1})
        assert response.status_code == 401


class TestGetCart:
    def test_no_cart_returns_empty_view(self, client, cart_service):
        response = client.get("/cart", headers=HEADERS)
        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0}
        assert cart_service.get_cart("user-001") is None

    def test_cart_items_carry_product_details(self, client, catalogue_service, in_catalogue, product_id):
        client.post("/cart", json={"product_id": product_id, "quantity": 2}, headers=HEADERS)
        with in_catalogue():
            catalogue_service.change_price(product_id, 6.0)

        response = client.get("/cart", headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 10.0
        assert data["items"][0]["price"] == 5.0
        assert data["items"][0]["product"] == {"name": "Mug", "price": 6.0, "stock": 10}


class TestAddToCart:
    def test_add_creates_cart(self, client, product_id):
        response = client.post("/cart", json={"product_id": product_id, "quantity": 2}, headers=HEADERS)
        assert response.status_code == 201
        data = response.json()
        assert data["owner_id"] == "user-001"
        assert data["items"] == [{"product_id": product_id, "quantity": 2, "price": 5.0}]
        assert data["total"] == 10.0

    def test_add_accepts_product_id_in_camel_case(self, client, product_id):
        response = client.post("/cart", json={"productId": product_id, "quantity": 2}, headers=HEADERS)
        assert response.status_code == 201
        assert _lines(response) == [(product_id, 2, 5.0)]

    def test_missing_quantity_is_invalid(self, client, product_id, cart_service):
        response = client.post("/cart", json={"productId": product_id}, headers=HEADERS)
        assert response.status_code == 400
        assert response.json() == {
            "error": "InvalidQuantity",
            "message": "Quantity must be a positive integer",
        }
        assert cart_service.get_cart("user-001") is None

    def test_add_again_replaces_quantity(self, client, product_id):
        client.post("/cart", json={"product_id": product_id, "quantity": 3}, headers=HEADERS)
        response = client.post("/cart", json={"product_id": product_id, "quantity": 5}, headers=HEADERS)
        assert _lines(response) == [(product_id, 5, 5.0)]
        assert response.json()["total"] == 25.0

    def test_unknown_product(self, client):
        response = client.post("/cart", json={"product_id": "no-such-product", "quantity": 1}, headers=HEADERS)
        assert response.status_code == 404
        assert response.json() == {"error": "ProductNotFound", "message": "Product not found"}

    @pytest.mark.parametrize("quantity", [0, -2, 1.5, "3", None])
    def test_invalid_quantity(self, client, product_id, quantity):
        response = client.post("/cart", json={"product_id": product_id, "quantity": quantity}, headers=HEADERS)
        assert response.status_code == 400
        assert response.json() == {
            "error": "InvalidQuantity",
            "message": "Quantity must be a positive integer",
        }

    def test_not_enough_stock(self, client, product_id):
        response = client.post("/cart", json={"product_id": product_id, "quantity": 11}, headers=HEADERS)
        assert response.status_code == 400
        assert response.json() == {"error": "InsufficientStock", "message": "Not enough stock"}

    def test_missing_product_id_is_a_shape_error(self, client):
        response = client.post("/cart", json={"quantity": 1}, headers=HEADERS)
        assert response.status_code == 422


class TestUpdateCartItem:
    def test_update_quantity(self, client, product_id):
        client.post("/cart", json={"product_id": product_id, "quantity": 1}, headers=HEADERS)
        response = client.put(f"/cart/{product_id}", json={"quantity": 4}, headers=HEADERS)
        assert response.status_code == 200
        assert _lines(response) == [(product_id, 4, 5.0)]
        assert response.json()["total"] == 20.0

    def test_update_refreshes_price(self, client, catalogue_service, in_catalogue, product_id):
        client.post("/cart", json={"product_id": product_id, "quantity": 2}, headers=HEADERS)
        with in_catalogue():
            catalogue_service.change_price(product_id, 7.5)

        response = client.put(f"/cart/{product_id}", json={"quantity": 2}, headers=HEADERS)
        assert _lines(response) == [(product_id, 2, 7.5)]
        assert response.json()["total"] == 15.0

    def test_update_without_cart(self, client, product_id):
        response = client.put(f"/cart/{product_id}", json={"quantity": 1}, headers=HEADERS)
        assert response.status_code == 404
        assert response.json() == {"error": "CartNotFound", "message": "Cart not found"}

    def test_update_item_not_in_cart(self, client, make_product, product_id):
        other = make_product(name="Plate")
        client.post("/cart", json={"product_id": product_id, "quantity": 1}, headers=HEADERS)

        response = client.put(f"/cart/{other.id}", json={"quantity": 1}, headers=HEADERS)
        assert response.status_code == 404
        assert response.json() == {"error": "ItemNotFound", "message": "Item not found in cart"}

    def test_update_without_quantity(self, client, product_id):
        client.post("/cart", json={"product_id": product_id, "quantity": 1}, headers=HEADERS)
        response = client.put(f"/cart/{product_id}", json={}, headers=HEADERS)
        assert response.status_code == 400
        assert response.json()["error"] == "InvalidQuantity"


class TestRemoveAndClear:
    def test_remove_line(self, client, product_id):
        client.post("/cart", json={"product_id": product_id, "quantity": 2}, headers=HEADERS)
        response = client.delete(f"/cart/{product_id}", headers=HEADERS)
        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["total"] == 0

    def test_remove_absent_line(self, client, product_id):
        client.post("/cart", json={"product_id": product_id, "quantity": 2}, headers=HEADERS)
        response = client.delete("/cart/never-added", headers=HEADERS)
        assert response.status_code == 200
        assert _lines(response) == [(product_id, 2, 5.0)]

    def test_remove_without_cart(self, client):
        response = client.delete("/cart/prod-001", headers=HEADERS)
        assert response.status_code == 404
        assert response.json()["error"] == "CartNotFound"

    def test_clear_cart(self, client, product_id):
        client.post("/cart", json={"product_id": product_id, "quantity": 2}, headers=HEADERS)
        response = client.delete("/cart", headers=HEADERS)
        assert response.status_code == 200
        assert response.json() == {"message": "Cart cleared"}

        view = client.get("/cart", headers=HEADERS).json()
        assert view["items"] == []
        assert view["total"] == 0
        assert "id" in view

    def test_clear_without_cart(self, client):
        response = client.delete("/cart", headers=HEADERS)
        assert response.status_code == 404


class TestEndToEnd:
    def test_add_replace_then_rejected_update(self, client, make_product):
        p1 = make_product(name="P1", price=5.0, stock=10).id

        response = client.post("/cart", json={"product_id": p1, "quantity": 2}, headers=HEADERS)
        assert response.json()["total"] == 10.0

        response = client.post("/cart", json={"product_id": p1, "quantity": 1}, headers=HEADERS)
        assert _lines(response) == [(p1, 1, 5.0)]
        assert response.json()["total"] == 5.0

        response = client.put(f"/cart/{p1}", json={"quantity": 20}, headers=HEADERS)
        assert response.status_code == 400
        assert response.json()["error"] == "InsufficientStock"

        view = client.get("/cart", headers=HEADERS).json()
        assert [(item["product_id"], item["quantity"]) for item in view["items"]] == [(p1, 1)]
        assert view["total"] == 5.0

    def test_owners_have_separate_carts(self, client, product_id):
        client.post("/cart", json={"product_id": product_id, "quantity": 2}, headers=HEADERS)
        response = client.get("/cart", headers={"X-User-Id": "user-002"})
        assert response.json() == {"items": [], "total": 0}


class TestStoreUnavailable:
    @pytest.fixture()
    def broken_client(self, client, monkeypatch):
        def _refuse(*args, **kwargs):
            raise DatabaseError("connection refused")

        monkeypatch.setattr(BaseRepository, "find_by", _refuse)
        monkeypatch.setattr(BaseRepository, "get_or_none", _refuse)
        return client

    def test_cart_read_fails_with_503(self, broken_client):
        response = broken_client.get("/cart", headers=HEADERS)
        assert response.status_code == 503
        assert response.json() == {"error": "StoreUnavailable", "message": "Service temporarily unavailable"}

    def test_cart_mutation_fails_with_503(self, broken_client):
        response = broken_client.post("/cart", json={"product_id": "prod-001", "quantity": 1}, headers=HEADERS)
        assert response.status_code == 503


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert set(response.json()["domains"]) == {"catalogue", "ordering"}
