"""Helpers and constants shared by the test modules."""

from fastapi.testclient import TestClient
from kungfu import Error, Ok, Result

from storefront import ErrorKind, ShopError

TEST_SECRET = "storefront-test-secret-0123456789abcdef"
ADMIN_KEY = "admin-signup-key"


def ok[T](result: Result[T, ShopError]) -> T:
    match result:
        case Ok(value):
            return value
        case Error(e):
            raise AssertionError(f"expected Ok, got {e}")


def err(result: Result[object, ShopError], kind: ErrorKind | None = None) -> ShopError:
    match result:
        case Ok(value):
            raise AssertionError(f"expected Error, got Ok({value!r})")
        case Error(e):
            if kind is not None:
                assert e.kind is kind, f"expected {kind}, got {e}"
            return e


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class Shop:
    """Thin HTTP driver for scenario tests."""

    def __init__(self, client: TestClient) -> None:
        self.client = client
        self._n = 0

    def register(self, role: str = "customer", **fields) -> tuple[str, dict]:
        self._n += 1
        body = {
            "name": f"Shopper {self._n}",
            "email": f"shopper{self._n}@example.com",
            "password": "secret123",
            "role": role,
            **fields,
        }
        headers = {"X-Admin-Signup-Key": ADMIN_KEY} if role == "admin" else {}
        response = self.client.post("/api/auth/register", json=body, headers=headers)
        assert response.status_code == 201, response.json()
        data = response.json()
        return data["token"], data["data"]["user"]

    def customer(self) -> str:
        return self.register()[0]

    def admin(self) -> str:
        return self.register(role="admin")[0]

    def create_product(self, admin_token: str, **fields) -> dict:
        body = {
            "title": "Widget",
            "description": "A widget",
            "price": 1000,
            "stock": 5,
            "category": "general",
            **fields,
        }
        response = self.client.post("/api/products", json=body, headers=bearer(admin_token))
        assert response.status_code == 201, response.json()
        return response.json()["data"]["product"]

    def stock_of(self, product_id: str) -> int:
        return self.client.get(f"/api/products/{product_id}").json()["data"]["product"]["stock"]

    def add_to_cart(self, token: str, product_id: str, quantity: int = 1):
        return self.client.post(
            "/api/cart",
            json={"product_id": product_id, "quantity": quantity},
            headers=bearer(token),
        )

    def place_order(self, token: str):
        return self.client.post("/api/orders", headers=bearer(token))

    def order(self, token: str, product_id: str, quantity: int = 1) -> dict:
        assert self.add_to_cart(token, product_id, quantity).status_code == 200
        response = self.place_order(token)
        assert response.status_code == 201, response.json()
        return response.json()["data"]["order"]

    def cancel(self, token: str, order_id: str):
        return self.client.put(f"/api/orders/{order_id}/cancel", headers=bearer(token))

    def set_status(self, token: str, order_id: str, status: str):
        return self.client.put(
            f"/api/orders/{order_id}/status", json={"status": status}, headers=bearer(token)
        )


