"""Tests for the product catalog endpoints."""

import pytest


@pytest.fixture
def product_payload(category):
    return {
        "name": "Laptop",
        "slug": "laptop",
        "description": "A portable computer",
        "price": "1299.99",
        "stock": 7,
        "categoryId": category.id,
        "images": ["https://example.com/laptop.jpg"],
    }


class TestCreateProduct:
    def test_admin_creates_product(self, client, admin_headers, product_payload, category):
        response = client.post("/api/products", json=product_payload, headers=admin_headers)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "laptop"
        assert data["price"] == "1299.99"
        assert data["stock"] == 7
        assert data["isActive"] is True
        assert data["category"] == {"id": category.id, "name": "Electronics", "slug": "electronics"}

    def test_user_is_forbidden(self, client, user_headers, product_payload):
        response = client.post("/api/products", json=product_payload, headers=user_headers)
        assert response.status_code == 403

    def test_duplicate_slug_conflicts(self, client, admin_headers, product_payload):
        client.post("/api/products", json=product_payload, headers=admin_headers)
        response = client.post("/api/products", json=product_payload, headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["error"]["name"] == "ConflictError"

    def test_unknown_category(self, client, admin_headers, product_payload):
        product_payload["categoryId"] = "missing"
        response = client.post("/api/products", json=product_payload, headers=admin_headers)
        assert response.status_code == 404

    def test_negative_price_rejected(self, client, admin_headers, product_payload):
        product_payload["price"] = "-1"
        response = client.post("/api/products", json=product_payload, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["name"] == "ValidationError"


class TestListProducts:
    @pytest.fixture
    def catalog(self, make_product):
        return [
            make_product(name="Alpha Phone", price="100.00", stock=3),
            make_product(name="Beta Tablet", price="300.00", stock=0),
            make_product(name="Gamma Watch", price="200.00", stock=9, is_active=False),
        ]

    def test_default_sort_and_pagination(self, client, catalog):
        response = client.get("/api/products?limit=2")
        body = response.json()
        assert response.status_code == 200
        assert len(body["data"]) == 2
        assert body["pagination"]["total"] == 3
        assert body["pagination"]["totalPages"] == 2

    def test_sort_by_price(self, client, catalog):
        response = client.get("/api/products?sortBy=price&sortOrder=asc")
        assert [p["price"] for p in response.json()["data"]] == ["100.00", "200.00", "300.00"]

    def test_search_is_case_insensitive(self, client, catalog):
        response = client.get("/api/products?search=tablet")
        assert [p["name"] for p in response.json()["data"]] == ["Beta Tablet"]

    def test_price_range(self, client, catalog):
        response = client.get("/api/products?minPrice=150&maxPrice=250")
        assert [p["name"] for p in response.json()["data"]] == ["Gamma Watch"]

    def test_in_stock_and_active_filters(self, client, catalog):
        response = client.get("/api/products?inStock=true&isActive=true")
        assert [p["name"] for p in response.json()["data"]] == ["Alpha Phone"]

    def test_invalid_sort_field(self, client, catalog):
        response = client.get("/api/products?sortBy=password")
        assert response.status_code == 400


class TestGetProduct:
    def test_by_id_includes_rating_summary(self, client, product):
        response = client.get(f"/api/products/{product.id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Phone"
        assert data["averageRating"] == 0.0
        assert data["reviewCount"] == 0

    def test_by_slug(self, client, product):
        response = client.get(f"/api/products/slug/{product.slug}")
        assert response.json()["data"]["id"] == product.id

    def test_not_found(self, client):
        response = client.get("/api/products/nope")
        assert response.status_code == 404
        assert response.json()["error"]["name"] == "NotFoundError"


class TestUpdateProduct:
    def test_partial_update(self, client, admin_headers, product):
        response = client.patch(
            f"/api/products/{product.id}", json={"price": "12.50"}, headers=admin_headers
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == "12.50"
        assert data["name"] == "Phone"

    def test_slug_taken_by_another_product(self, client, admin_headers, product, make_product):
        other = make_product()
        response = client.patch(
            f"/api/products/{product.id}", json={"slug": other.slug}, headers=admin_headers
        )
        assert response.status_code == 409

    def test_keeping_own_slug_is_fine(self, client, admin_headers, product):
        response = client.patch(
            f"/api/products/{product.id}", json={"slug": product.slug, "stock": 9}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["stock"] == 9


class TestDeleteProduct:
    def test_delete(self, client, admin_headers, product):
        response = client.delete(f"/api/products/{product.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Product deleted"
        assert client.get(f"/api/products/{product.id}").status_code == 404

    def test_cannot_delete_ordered_product(self, client, admin_headers, user_headers, product):
        client.post(
            "/api/orders",
            json={"items": [{"productId": product.id, "quantity": 1}]},
            headers=user_headers,
        )
        response = client.delete(f"/api/products/{product.id}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["name"] == "InvalidStateError"


class TestAdjustStock:
    def test_add_and_remove(self, client, admin_headers, product):
        url = f"/api/products/{product.id}/stock"

        response = client.patch(url, json={"quantity": 4}, headers=admin_headers)
        assert response.json()["data"]["stock"] == 9

        response = client.patch(url, json={"quantity": -9}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["stock"] == 0

    def test_repeated_calls_compound(self, client, admin_headers, product):
        url = f"/api/products/{product.id}/stock"
        client.patch(url, json={"quantity": 2}, headers=admin_headers)
        response = client.patch(url, json={"quantity": 2}, headers=admin_headers)
        assert response.json()["data"]["stock"] == 9

    def test_cannot_go_negative(self, client, admin_headers, product):
        response = client.patch(
            f"/api/products/{product.id}/stock", json={"quantity": -6}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["error"]["name"] == "InsufficientStockError"
        assert client.get(f"/api/products/{product.id}").json()["data"]["stock"] == 5

    def test_user_is_forbidden(self, client, user_headers, product):
        response = client.patch(
            f"/api/products/{product.id}/stock", json={"quantity": 1}, headers=user_headers
        )
        assert response.status_code == 403
