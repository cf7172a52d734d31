"""Tests for the cart and checkout API routes"""

import httpx

JACKET = {
    "id": 1,
    "name": "Classic Leather Jacket",
    "price": 100,
    "image": "/uploads/jacket.jpg",
    "category": "Jackets",
    "quantity": 2,
    "size": "M",
    "color": "Black",
    "material": "Leather",
}

CUSTOMER = {
    "name": "Abebe Kebede",
    "email": "abebe@example.com",
    "phone": "+251911000000",
}


def start_session(client) -> dict:
    response = client.get("/api/cart")
    assert response.status_code == 200
    return {"X-Cart-Session": response.json()["session_id"]}


class TestCartRoutes:
    """Cart endpoints share one session through the X-Cart-Session header"""

    def test_new_session_is_issued(self, client):
        response = client.get("/api/cart")

        data = response.json()
        assert response.headers["X-Cart-Session"] == data["session_id"]
        assert data["cart"] == {"items": [], "totalItems": 0, "totalAmount": 0.0}

    def test_add_and_merge(self, client):
        headers = start_session(client)

        client.post("/api/cart/items", json=JACKET, headers=headers)
        response = client.post("/api/cart/items", json={**JACKET, "quantity": 3}, headers=headers)

        cart = response.json()["cart"]
        assert len(cart["items"]) == 1
        assert cart["items"][0]["id"] == 1
        assert cart["items"][0]["quantity"] == 5
        assert cart["totalAmount"] == 500.0

    def test_update_quantity_and_remove(self, client):
        headers = start_session(client)
        client.post("/api/cart/items", json=JACKET, headers=headers)

        response = client.put("/api/cart/items/1", json={"quantity": 4}, headers=headers)
        assert response.json()["cart"]["totalItems"] == 4

        response = client.put("/api/cart/items/1", json={"quantity": 0}, headers=headers)
        assert response.json()["cart"]["items"] == []

    def test_update_options(self, client):
        headers = start_session(client)
        client.post("/api/cart/items", json=JACKET, headers=headers)

        response = client.patch("/api/cart/items/1/options", json={"color": "Brown"}, headers=headers)

        item = response.json()["cart"]["items"][0]
        assert (item["size"], item["color"]) == ("M", "Brown")

    def test_delete_item_and_clear(self, client):
        headers = start_session(client)
        client.post("/api/cart/items", json=JACKET, headers=headers)
        client.post("/api/cart/items", json={**JACKET, "id": 2}, headers=headers)

        response = client.delete("/api/cart/items/1", headers=headers)
        assert [i["id"] for i in response.json()["cart"]["items"]] == [2]

        response = client.delete("/api/cart", headers=headers)
        assert response.json()["cart"]["totalItems"] == 0

    def test_restore(self, client):
        headers = start_session(client)

        response = client.put(
            "/api/cart",
            json={"items": [JACKET, {**JACKET, "id": 2, "quantity": 1, "price": 50}]},
            headers=headers,
        )

        cart = response.json()["cart"]
        assert cart["totalItems"] == 3
        assert cart["totalAmount"] == 250.0

    def test_contains(self, client):
        headers = start_session(client)
        client.post("/api/cart/items", json=JACKET, headers=headers)

        hit = client.get("/api/cart/contains/1", params={"size": "M", "color": "Black"}, headers=headers)
        miss = client.get("/api/cart/contains/1", params={"size": "L", "color": "Black"}, headers=headers)

        assert hit.json()["in_cart"] is True
        assert miss.json()["in_cart"] is False

    def test_sessions_are_isolated(self, client):
        first = start_session(client)
        second = start_session(client)
        client.post("/api/cart/items", json=JACKET, headers=first)

        response = client.get("/api/cart", headers=second)

        assert response.json()["cart"]["totalItems"] == 0

    def test_invalid_line_rejected(self, client):
        headers = start_session(client)

        response = client.post("/api/cart/items", json={**JACKET, "quantity": 0}, headers=headers)

        assert response.status_code == 422


class TestCheckoutRoutes:
    """Order submission through the API"""

    def test_validation_failure_is_400(self, client, backend):
        headers = start_session(client)
        client.post("/api/cart/items", json=JACKET, headers=headers)

        response = client.post("/api/checkout", json={**CUSTOMER, "email": "nope"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["errors"] == {"email": "Please enter a valid email"}
        assert backend.requests == []

    def test_empty_cart_is_400(self, client):
        headers = start_session(client)

        response = client.post("/api/checkout", json=CUSTOMER, headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Cart is empty"

    def test_successful_checkout_clears_cart(self, client, backend):
        backend.on("POST", "/api/public/orders", json_body={"success": True, "data": {"orderId": 77}})
        headers = start_session(client)
        client.post("/api/cart/items", json=JACKET, headers=headers)

        response = client.post("/api/checkout", json=CUSTOMER, headers=headers)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["order_id"] == 77
        assert client.get("/api/cart", headers=headers).json()["cart"]["totalItems"] == 0

    def test_backend_failure_keeps_cart(self, client, backend):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        backend.on("POST", "/api/public/orders", handler=refuse)
        headers = start_session(client)
        client.post("/api/cart/items", json=JACKET, headers=headers)

        response = client.post("/api/checkout", json=CUSTOMER, headers=headers)

        assert response.json()["success"] is False
        assert response.json()["error_message"] == "Failed to submit order. Please try again."
        assert client.get("/api/cart", headers=headers).json()["cart"]["totalItems"] == 2


class TestCatalogRoutes:
    """Catalog passthrough"""

    def test_products(self, client, backend):
        backend.on("GET", "/api/public/products", json_body={"data": [{"id": 1, "title": "Belt", "price": "300"}]})

        response = client.get("/api/products")

        assert response.status_code == 200
        assert response.json()["total"] == 1
        assert response.json()["products"][0]["price"] == 300.0

    def test_backend_down_is_502(self, client, backend):
        backend.on("GET", "/api/public/categories", status_code=503, json_body={"message": "maintenance"})

        response = client.get("/api/categories")

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to fetch categories: maintenance"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"
