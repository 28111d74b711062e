"""Tests for the category endpoints."""

import pytest


def create_category(client, headers, **fields):
    payload = {"name": fields.pop("name", "Category"), "slug": fields.pop("slug", "category")}
    payload.update(fields)
    response = client.post("/api/categories", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateCategory:
    def test_create_root_and_child(self, client, admin_headers):
        root = create_category(client, admin_headers, name="Clothing", slug="clothing")
        child = create_category(client, admin_headers, name="Shoes", slug="shoes", parentId=root["id"])

        assert root["parentId"] is None
        assert root["productCount"] == 0
        assert child["parent"] == {"id": root["id"], "name": "Clothing", "slug": "clothing"}

    def test_duplicate_slug(self, client, admin_headers, category):
        response = client.post(
            "/api/categories", json={"name": "Other", "slug": category.slug}, headers=admin_headers
        )
        assert response.status_code == 409

    def test_missing_parent(self, client, admin_headers):
        response = client.post(
            "/api/categories",
            json={"name": "Orphan", "slug": "orphan", "parentId": "missing"},
            headers=admin_headers,
        )
        assert response.status_code == 404

    def test_user_is_forbidden(self, client, user_headers):
        response = client.post("/api/categories", json={"name": "Nope", "slug": "nope"}, headers=user_headers)
        assert response.status_code == 403


class TestReadCategories:
    def test_list_is_ordered_by_name_with_counts(self, client, admin_headers, category, make_product):
        make_product()
        make_product()
        create_category(client, admin_headers, name="Books", slug="books")

        response = client.get("/api/categories")
        data = response.json()["data"]
        assert [c["name"] for c in data] == ["Books", "Electronics"]
        assert data[1]["productCount"] == 2

    def test_root_only(self, client, admin_headers, category):
        create_category(client, admin_headers, name="Phones", slug="phones", parentId=category.id)

        response = client.get("/api/categories?rootOnly=true")
        assert [c["slug"] for c in response.json()["data"]] == ["electronics"]

        response = client.get(f"/api/categories?parentId={category.id}")
        assert [c["slug"] for c in response.json()["data"]] == ["phones"]

    def test_tree(self, client, admin_headers, category, make_product):
        phones = create_category(client, admin_headers, name="Phones", slug="phones", parentId=category.id)
        create_category(client, admin_headers, name="Android", slug="android", parentId=phones["id"])
        make_product(category_id=phones["id"])

        response = client.get("/api/categories/tree")
        assert response.status_code == 200
        tree = response.json()["data"]
        assert len(tree) == 1
        assert tree[0]["slug"] == "electronics"
        phones_node = tree[0]["children"][0]
        assert phones_node["productCount"] == 1
        assert [c["slug"] for c in phones_node["children"]] == ["android"]

    def test_by_slug_and_id(self, client, category):
        assert client.get("/api/categories/slug/electronics").json()["data"]["id"] == category.id
        assert client.get(f"/api/categories/{category.id}").json()["data"]["slug"] == "electronics"
        assert client.get("/api/categories/missing").status_code == 404


class TestUpdateCategory:
    def test_rename(self, client, admin_headers, category):
        response = client.patch(
            f"/api/categories/{category.id}", json={"name": "Gadgets"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Gadgets"

    def test_cannot_be_own_parent(self, client, admin_headers, category):
        response = client.patch(
            f"/api/categories/{category.id}", json={"parentId": category.id}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["error"]["name"] == "ValidationError"

    def test_detach_from_parent(self, client, admin_headers, category):
        child = create_category(client, admin_headers, name="Phones", slug="phones", parentId=category.id)
        response = client.patch(
            f"/api/categories/{child['id']}", json={"parentId": None}, headers=admin_headers
        )
        assert response.json()["data"]["parentId"] is None


class TestDeleteCategory:
    def test_delete_empty_category(self, client, admin_headers):
        created = create_category(client, admin_headers, name="Temp", slug="temp")
        response = client.delete(f"/api/categories/{created['id']}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get(f"/api/categories/{created['id']}").status_code == 404

    @pytest.mark.parametrize("blocker", ["product", "child"])
    def test_refuses_non_empty_category(self, client, admin_headers, category, make_product, blocker):
        if blocker == "product":
            make_product()
        else:
            create_category(client, admin_headers, name="Phones", slug="phones", parentId=category.id)

        response = client.delete(f"/api/categories/{category.id}", headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["error"]["name"] == "InvalidStateError"
