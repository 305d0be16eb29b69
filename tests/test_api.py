"""Tests for the HTTP API."""

import logging
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from storefront.api import SECURITY_HEADERS, create_app

from support import Shop, bearer


class TestHealthAndRouting:
    def test_health(self, client):
        response = client.get("/api/")
        assert response.status_code == 200
        assert response.json()["status"] == "success"

    def test_unknown_route(self, client):
        response = client.get("/api/nowhere")
        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "fail"
        assert body["message"] == "Can't find /api/nowhere on this server!"

    def test_security_headers(self, client):
        for path in ("/api/", "/api/nowhere"):
            response = client.get(path)
            for name, value in SECURITY_HEADERS.items():
                assert response.headers[name] == value


class TestAuth:
    def test_register_hides_password(self, shop):
        token, user = shop.register()
        assert token
        assert user["role"] == "customer"
        assert "password" not in user
        assert "password_hash" not in user

    def test_duplicate_email(self, shop, client):
        shop.register(email="dup@example.com")
        response = client.post(
            "/api/auth/register",
            json={"name": "Again", "email": "dup@example.com", "password": "secret123"},
        )
        assert response.status_code == 400
        assert response.json()["error_type"] == "DuplicateValue"

    def test_admin_signup_requires_key(self, client):
        body = {"name": "Root", "email": "root@example.com", "password": "secret123", "role": "admin"}
        response = client.post("/api/auth/register", json=body)
        assert response.status_code == 403
        response = client.post(
            "/api/auth/register", json=body, headers={"X-Admin-Signup-Key": "wrong"}
        )
        assert response.status_code == 403

    def test_register_validation(self, client):
        response = client.post(
            "/api/auth/register", json={"name": "A", "email": "nope", "password": "123"}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error_type"] == "ValidationError"
        assert "email" in body["message"]

    def test_login(self, shop, client):
        shop.register(email="login@example.com")
        response = client.post(
            "/api/auth/login", json={"email": "login@example.com", "password": "secret123"}
        )
        assert response.status_code == 200
        assert response.json()["token"]

        response = client.post(
            "/api/auth/login", json={"email": "login@example.com", "password": "bad-pass"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Incorrect email or password"

    def test_protected_route_needs_token(self, client):
        assert client.get("/api/cart").status_code == 401
        assert client.get("/api/cart", headers=bearer("junk")).status_code == 401

    def test_password_limit_counts_bytes(self, client):
        # 40 characters, 80 bytes
        response = client.post(
            "/api/auth/register",
            json={"name": "Accent", "email": "accent@example.com", "password": "\u00e9" * 40},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error_type"] == "ValidationError"
        assert "password" in body["message"]

        response = client.post(
            "/api/auth/register",
            json={"name": "Accent", "email": "accent@example.com", "password": "\u00e9" * 36},
        )
        assert response.status_code == 201

    def test_overlong_login_password_is_just_wrong(self, shop, client):
        shop.register(email="long@example.com")
        response = client.post(
            "/api/auth/login", json={"email": "long@example.com", "password": "x" * 100}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Incorrect email or password"

    def test_me(self, shop, client):
        token, user = shop.register(email="me@example.com")
        response = client.get("/api/auth/me", headers=bearer(token))
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["user"]["id"] == user["id"]
        assert body["data"]["user"]["email"] == "me@example.com"
        assert "password_hash" not in body["data"]["user"]
        assert client.get("/api/auth/me").status_code == 401


class TestProducts:
    def test_public_reads(self, shop, client):
        admin = shop.admin()
        product = shop.create_product(admin, title="Mug", price=899)

        listing = client.get("/api/products").json()
        assert listing["results"] == 1
        assert listing["data"]["products"][0]["title"] == "Mug"
        assert client.get(f"/api/products/{product['id']}").status_code == 200

    def test_customer_cannot_write(self, shop, client):
        customer = shop.customer()
        response = client.post(
            "/api/products",
            json={"title": "X", "description": "d", "price": 1, "stock": 1, "category": "c"},
            headers=bearer(customer),
        )
        assert response.status_code == 403
        assert response.json()["message"] == "You do not have permission to perform this action"

    def test_update_and_soft_delete(self, shop, client):
        admin = shop.admin()
        product = shop.create_product(admin, stock=2)

        response = client.put(
            f"/api/products/{product['id']}", json={"stock": 9}, headers=bearer(admin)
        )
        assert response.status_code == 200
        assert response.json()["data"]["product"]["stock"] == 9

        response = client.delete(f"/api/products/{product['id']}", headers=bearer(admin))
        assert response.status_code == 204
        assert client.get(f"/api/products/{product['id']}").status_code == 404
        assert client.get("/api/products").json()["results"] == 0

    def test_negative_price_rejected(self, shop, client):
        admin = shop.admin()
        response = client.post(
            "/api/products",
            json={"title": "X", "description": "d", "price": -5, "stock": 1, "category": "c"},
            headers=bearer(admin),
        )
        assert response.status_code == 400


class TestCart:
    def test_cart_flow(self, shop, client):
        admin = shop.admin()
        customer = shop.customer()
        product = shop.create_product(admin, price=300, stock=10)

        empty = client.get("/api/cart", headers=bearer(customer)).json()["data"]["cart"]
        assert empty["items"] == []
        assert empty["total_price"] == 0

        cart = shop.add_to_cart(customer, product["id"], 2).json()["data"]["cart"]
        assert cart["total_price"] == 600
        item_id = cart["items"][0]["id"]

        response = client.patch(
            f"/api/cart/{item_id}", json={"quantity": 4}, headers=bearer(customer)
        )
        assert response.json()["data"]["cart"]["total_price"] == 1200

        response = client.delete(f"/api/cart/{item_id}", headers=bearer(customer))
        assert response.status_code == 200
        assert response.json()["data"]["cart"]["items"] == []

    def test_add_validation_and_stock(self, shop, client):
        admin = shop.admin()
        customer = shop.customer()
        product = shop.create_product(admin, stock=1)

        assert shop.add_to_cart(customer, product["id"], 0).status_code == 400
        response = shop.add_to_cart(customer, product["id"], 2)
        assert response.status_code == 400
        assert response.json()["error_type"] == "InsufficientStock"
        assert shop.add_to_cart(customer, "f" * 32, 1).status_code == 404

    def test_remove_without_cart(self, shop, client):
        customer = shop.customer()
        response = client.delete("/api/cart/whatever", headers=bearer(customer))
        assert response.status_code == 404


class TestOrders:
    def test_scenario_a_place_order(self, shop, client):
        admin = shop.admin()
        customer = shop.customer()
        product = shop.create_product(admin, price=1500, stock=5)

        assert shop.add_to_cart(customer, product["id"], 2).status_code == 200
        response = shop.place_order(customer)

        assert response.status_code == 201
        order = response.json()["data"]["order"]
        assert order["status"] == "Pending"
        assert order["payment_status"] == "Pending"
        assert order["total_amount"] == sum(i["price"] * i["quantity"] for i in order["items"])
        assert order["total_amount"] == 3000
        assert shop.stock_of(product["id"]) == 3

        cart = client.get("/api/cart", headers=bearer(customer)).json()["data"]["cart"]
        assert cart["items"] == []
        assert cart["total_price"] == 0

    def test_scenario_b_empty_cart(self, shop):
        customer = shop.customer()
        response = shop.place_order(customer)
        assert response.status_code == 400
        assert response.json()["error_type"] == "EmptyCart"

    def test_scenario_c_status_walk(self, shop):
        admin = shop.admin()
        customer = shop.customer()
        product = shop.create_product(admin)
        order = shop.order(customer, product["id"])

        response = shop.set_status(admin, order["id"], "Delivered")
        assert response.status_code == 400
        assert "Pending -> Delivered" in response.json()["message"]

        response = shop.set_status(admin, order["id"], "Shipped")
        assert response.status_code == 200
        assert response.json()["data"]["order"]["status"] == "Shipped"

        response = shop.set_status(admin, order["id"], "Delivered")
        assert response.status_code == 200
        assert response.json()["data"]["order"]["status"] == "Delivered"

        assert shop.set_status(admin, order["id"], "Cancelled").status_code == 400

    def test_status_requires_admin_and_valid_enum(self, shop):
        admin = shop.admin()
        customer = shop.customer()
        product = shop.create_product(admin)
        order = shop.order(customer, product["id"])

        assert shop.set_status(customer, order["id"], "Shipped").status_code == 403
        response = shop.set_status(admin, order["id"], "Lost")
        assert response.status_code == 400
        assert response.json()["error_type"] == "ValidationError"

    def test_scenario_d_window_expired(self, settings):
        expired = settings.model_copy(update={"cancellation_window": timedelta(0)})
        with TestClient(create_app(expired)) as client:
            shop = Shop(client)
            admin = shop.admin()
            customer_token, customer = shop.register()
            product = shop.create_product(admin, stock=5)
            order = shop.order(customer_token, product["id"], 2)
            assert shop.stock_of(product["id"]) == 3

            response = shop.cancel(customer_token, order["id"])
            assert response.status_code == 400
            assert response.json()["error_type"] == "CancellationWindowExpired"

            response = shop.cancel(admin, order["id"])
            assert response.status_code == 200
            body = response.json()
            assert body["message"] == "Order cancelled successfully"
            assert body["data"]["order"]["status"] == "Cancelled"
            assert body["data"]["account_suspended"] is False
            assert shop.stock_of(product["id"]) == 5

            login = client.post(
                "/api/auth/login", json={"email": customer["email"], "password": "secret123"}
            )
            assert login.json()["data"]["user"]["cancellation_count"] == 0

    def test_scenario_e_fraud_suspension(self, shop, client):
        admin = shop.admin()
        token, user = shop.register()
        product = shop.create_product(admin, stock=5)

        for n in range(1, 5):
            order = shop.order(token, product["id"])
            response = shop.cancel(token, order["id"])
            assert response.status_code == 200
            suspended = response.json()["data"]["account_suspended"]
            assert suspended is (n == 4)

        assert "suspended" in response.json()["message"]
        assert shop.stock_of(product["id"]) == 5

        login = client.post(
            "/api/auth/login", json={"email": user["email"], "password": "secret123"}
        )
        assert login.status_code == 403
        assert login.json()["error_type"] == "AccountBlocked"

        # the old token stops working too
        response = client.get("/api/orders", headers=bearer(token))
        assert response.status_code == 403

    def test_cancel_errors(self, shop, client):
        admin = shop.admin()
        owner = shop.customer()
        stranger = shop.customer()
        product = shop.create_product(admin)
        order = shop.order(owner, product["id"])

        assert shop.cancel(stranger, order["id"]).status_code == 403
        assert shop.cancel(owner, "0" * 32).status_code == 404
        assert shop.cancel(owner, order["id"]).status_code == 200

        response = shop.cancel(owner, order["id"])
        assert response.status_code == 400
        assert response.json()["error_type"] == "AlreadyCancelled"

    def test_admin_cannot_checkout(self, shop):
        admin = shop.admin()
        assert shop.place_order(admin).status_code == 403

    def test_list_and_get(self, shop, client):
        admin = shop.admin()
        customer = shop.customer()
        other = shop.customer()
        product = shop.create_product(admin, stock=10)
        first = shop.order(customer, product["id"])
        second = shop.order(customer, product["id"])

        listing = client.get("/api/orders", headers=bearer(customer)).json()
        assert listing["results"] == 2
        assert [o["id"] for o in listing["data"]["orders"]] == [second["id"], first["id"]]

        assert client.get(f"/api/orders/{first['id']}", headers=bearer(customer)).status_code == 200
        assert client.get(f"/api/orders/{first['id']}", headers=bearer(admin)).status_code == 200
        assert client.get(f"/api/orders/{first['id']}", headers=bearer(other)).status_code == 403
        assert client.get("/api/orders/" + "0" * 32, headers=bearer(other)).status_code == 404


class TestUnexpectedErrors:
    @pytest.fixture
    def failing_client(self, settings, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("connection string postgres://root:hunter2@db")

        with TestClient(create_app(settings), raise_server_exceptions=False) as client:
            monkeypatch.setattr(client.app.state.services.catalog, "list_products", explode)
            yield client

    def test_generic_answer_without_internals(self, failing_client, caplog):
        caplog.set_level(logging.INFO)
        response = failing_client.get("/api/products")

        assert response.status_code == 500
        assert response.json() == {
            "status": "error",
            "message": "Something went wrong.",
            "error_type": "InternalError",
        }
        assert "hunter2" not in response.text
        assert "RuntimeError" not in response.text

        errors = [
            r for r in caplog.records
            if r.name == "storefront.api._errors" and r.levelno == logging.ERROR
        ]
        assert len(errors) == 1
        assert errors[0].exc_info is not None
        assert "GET /api/products" in errors[0].getMessage()

    def test_access_log_records_the_failure(self, failing_client, caplog):
        caplog.set_level(logging.INFO, logger="storefront.access")
        failing_client.get("/api/products")
        lines = [r.getMessage() for r in caplog.records if r.name == "storefront.access"]
        assert any(line.startswith("GET /api/products 500 ") for line in lines)

    def test_other_routes_keep_working(self, failing_client):
        assert failing_client.get("/api/").status_code == 200
