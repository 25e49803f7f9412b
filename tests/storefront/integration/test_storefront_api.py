"""Integration tests for the Storefront API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import cart_router, customer_router, order_router, product_router, register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    app.include_router(customer_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    register_error_handlers(app)
    return TestClient(app)


def _create_product(client, **overrides):
    defaults = {
        "title": "Rainbow Hoodie",
        "price": 1000.0,
        "discount": 10,
        "gender": "unisex",
        "stock": [
            {"name": "red", "hex_code": "#FF0000", "inventory": [{"size": "M", "quantity": 5}]},
            {"name": "blue", "hex_code": "#0000FF", "inventory": [{"size": "S", "quantity": 3}]},
        ],
    }
    defaults.update(overrides)
    response = client.post("/products", json=defaults)
    assert response.status_code == 201
    return response.json()["product_id"]


def _register(client, email="ada@example.com"):
    response = client.post("/customers", json={"name": "Ada Shopper", "email": email})
    assert response.status_code == 201
    return response.json()["customer_id"]


def _add(client, product_id, quantity=1, color="red", size="M", **owner):
    return client.post(
        "/carts/items",
        json={"product_id": product_id, "size": size, "color": color, "quantity": quantity, **owner},
    )


class TestProductAPI:
    def test_get_product_views(self, client):
        product_id = _create_product(client)
        data = client.get(f"/products/{product_id}").json()
        assert data["discounted_price"] == 900.0
        assert data["savings"] == 100.0
        assert data["is_on_sale"] is True
        assert data["total_quantity"] == 8
        assert {c["name"] for c in data["available_colors"]} == {"red", "blue"}

    def test_unknown_product_returns_404(self, client):
        assert client.get("/products/prod-404").status_code == 404

    def test_update_and_delete(self, client):
        product_id = _create_product(client)
        assert client.put(f"/products/{product_id}", json={"title": "Cosy"}).status_code == 200
        assert client.get(f"/products/{product_id}").json()["title"] == "Cosy"
        assert client.delete(f"/products/{product_id}").status_code == 200
        assert client.get(f"/products/{product_id}").status_code == 404

    def test_inventory_endpoints(self, client):
        product_id = _create_product(client)
        response = client.put(f"/products/{product_id}/inventory", json={"size": "M", "color": "red", "quantity": 9})
        assert response.json()["total_quantity"] == 12

        response = client.post(f"/products/{product_id}/inventory/add", json={"size": "M", "color": "red", "quantity": 1})
        assert response.json()["total_quantity"] == 13

        response = client.post(
            f"/products/{product_id}/inventory/reduce", json={"size": "S", "color": "blue", "quantity": 3}
        )
        assert response.json()["total_quantity"] == 10

        response = client.put(
            f"/products/{product_id}/inventory/colors/red", json={"inventory": [{"size": "L", "quantity": 2}]}
        )
        assert response.json()["total_quantity"] == 2

    def test_reduce_beyond_stock_returns_available(self, client):
        product_id = _create_product(client)
        response = client.post(
            f"/products/{product_id}/inventory/reduce", json={"size": "M", "color": "red", "quantity": 8}
        )
        assert response.status_code == 400
        assert response.json()["details"]["available"] == 5

    def test_colors(self, client):
        product_id = _create_product(client)
        response = client.post(f"/products/{product_id}/colors", json={"name": "green", "hex_code": "#00FF00"})
        assert response.status_code == 201

        response = client.post(f"/products/{product_id}/colors", json={"name": "green", "hex_code": "#00FF00"})
        assert response.status_code == 409

        response = client.delete(f"/products/{product_id}/colors/blue")
        assert [c["name"] for c in response.json()["available_colors"]] == ["red"]


class TestCartAPI:
    def test_guest_cart_flow(self, client):
        product_id = _create_product(client)

        response = _add(client, product_id, 2, session_id="sess-001")
        assert response.status_code == 200
        assert response.json()["total_amount"] == 2000.0
        assert response.json()["is_guest"] is True

        response = client.put(
            "/carts/items",
            json={"session_id": "sess-001", "product_id": product_id, "size": "M", "color": "red", "quantity": 1},
        )
        assert response.json()["items"][0]["quantity"] == 1

        response = client.delete(
            "/carts/items", params={"session_id": "sess-001", "product_id": product_id, "size": "M", "color": "red"}
        )
        assert response.json()["items"] == []

    def test_customer_cart_shows_discounted_total(self, client):
        product_id = _create_product(client)
        customer_id = _register(client)
        response = _add(client, product_id, 2, customer_id=customer_id)
        assert response.json()["total_amount"] == 1800.0

    def test_get_cart_reconciles(self, client):
        product_id = _create_product(client)
        _add(client, product_id, 4, session_id="sess-001")
        client.put(f"/products/{product_id}/inventory", json={"size": "M", "color": "red", "quantity": 2})

        data = client.get("/carts/guest/sess-001").json()
        assert data["items"] == []
        assert data["total_amount"] == 0.0

    def test_get_missing_cart_returns_404(self, client):
        assert client.get("/carts/guest/sess-404").status_code == 404

    def test_invalid_color_lists_options(self, client):
        product_id = _create_product(client)
        response = _add(client, product_id, color="green", session_id="sess-001")
        assert response.status_code == 400
        assert response.json()["details"]["valid_options"] == ["blue", "red"]

    def test_insufficient_stock(self, client):
        product_id = _create_product(client)
        response = _add(client, product_id, 6, session_id="sess-001")
        assert response.status_code == 400
        assert response.json()["details"] == {"requested": 6, "available": 5}

    def test_clear(self, client):
        product_id = _create_product(client)
        _add(client, product_id, 2, session_id="sess-001")
        response = client.post("/carts/clear", json={"session_id": "sess-001"})
        assert response.json()["total_amount"] == 0.0


class TestOrderAPI:
    def test_place_and_fetch_order(self, client):
        product_id = _create_product(client)
        customer_id = _register(client)
        _add(client, product_id, 2, customer_id=customer_id)

        response = client.post("/orders", json={"customer_id": customer_id, "address": "1 Main St"})
        assert response.status_code == 201
        order = response.json()
        assert order["total_price"] == 1620.0
        assert order["new_customer_discount"] is True
        assert order["status"] == "pending"

        assert client.get(f"/orders/{order['order_id']}").json()["address"] == "1 Main St"
        listed = client.get(f"/orders/customer/{customer_id}").json()
        assert [o["order_id"] for o in listed] == [order["order_id"]]

        cart = client.get(f"/carts/customer/{customer_id}").json()
        assert cart["items"] == []

    def test_guest_order_requires_contact(self, client):
        product_id = _create_product(client)
        _add(client, product_id, 1, session_id="sess-001")
        response = client.post("/orders", json={"session_id": "sess-001", "guest_name": "Sam"})
        assert response.status_code == 400

    def test_empty_cart(self, client):
        customer_id = _register(client)
        response = client.post("/orders", json={"customer_id": customer_id})
        assert response.status_code == 400

    def test_insufficient_inventory_lists_lines(self, client):
        product_id = _create_product(client)
        _add(client, product_id, 3, session_id="sess-001")
        client.put(f"/products/{product_id}/inventory", json={"size": "M", "color": "red", "quantity": 1})

        response = client.post(
            "/orders", json={"session_id": "sess-001", "guest_email": "g@example.com", "guest_name": "Sam"}
        )
        assert response.status_code == 400
        assert response.json()["details"]["lines"][0]["available"] == 1

    def test_created_order_confirmation_sent_after_response(self, client, email_channel):
        product_id = _create_product(client)
        _add(client, product_id, 1, session_id="sess-001")

        response = client.post(
            "/orders", json={"session_id": "sess-001", "guest_email": "g@example.com", "guest_name": "Sam"}
        )

        assert response.status_code == 201
        assert [email.to for email in email_channel.outbox] == ["g@example.com"]

    def test_unknown_order_returns_404(self, client):
        assert client.get("/orders/ord-404").status_code == 404
        assert client.delete("/orders/ord-404").status_code == 404
        assert client.patch("/orders/ord-404", json={"status": "processing"}).status_code == 404

    def test_update_and_delete_order(self, client):
        product_id = _create_product(client)
        _add(client, product_id, 1, session_id="sess-001")
        order_id = client.post(
            "/orders", json={"session_id": "sess-001", "guest_email": "g@example.com", "guest_name": "Sam"}
        ).json()["order_id"]

        response = client.patch(f"/orders/{order_id}", json={"status": "processing", "total_price": 0})
        assert response.json()["status"] == "processing"
        assert response.json()["total_price"] == 900.0

        assert client.patch(f"/orders/{order_id}", json={"status": "pending"}).status_code == 400
        assert client.delete(f"/orders/{order_id}").status_code == 200
        assert client.get(f"/orders/{order_id}").status_code == 404
