"""Integration tests for Category API endpoints."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/categories/"


class TestCategoryCRUD:
    def test_create(self, api_client):
        response = api_client.post(
            URL, {"name": "Footwear", "description": "Shoes"}, format="json"
        )
        assert response.status_code == 201
        assert response.data["name"] == "Footwear"
        assert response.data["is_active"] is True

    def test_create_invalid(self, api_client):
        response = api_client.post(URL, {"name": ""}, format="json")
        assert response.status_code == 400
        assert "detail" in response.data

    def test_retrieve(self, api_client, category):
        response = api_client.get(f"{URL}{category.id}/")
        assert response.status_code == 200
        assert response.data["id"] == str(category.id)

    def test_retrieve_not_found(self, api_client):
        response = api_client.get(f"{URL}00000000-0000-0000-0000-000000000000/")
        assert response.status_code == 404
        assert response.data == {"detail": "Category not found."}

    def test_patch_merges(self, api_client, make_category):
        category = make_category(name="Home", description="Home goods")
        response = api_client.patch(
            f"{URL}{category.id}/", {"is_active": False}, format="json"
        )
        assert response.status_code == 200
        assert response.data["description"] == "Home goods"
        assert response.data["is_active"] is False

    def test_delete(self, api_client, category):
        response = api_client.delete(f"{URL}{category.id}/")
        assert response.status_code == 204
        assert api_client.get(f"{URL}{category.id}/").status_code == 404

    def test_delete_twice(self, api_client, category):
        api_client.delete(f"{URL}{category.id}/")
        assert api_client.delete(f"{URL}{category.id}/").status_code == 404


class TestCategoryList:
    def test_pagination_block(self, api_client, make_category):
        for i in range(3):
            make_category(name=f"C{i}")

        response = api_client.get(URL, {"limit": 2, "page": 2})

        assert response.status_code == 200
        assert len(response.data["results"]) == 1
        assert response.data["pagination"] == {
            "current_page": 2,
            "total_pages": 2,
            "total_items": 3,
            "items_per_page": 2,
        }

    def test_filters(self, api_client, make_category):
        make_category(name="Apparel")
        make_category(name="Appliances", is_active=False)

        response = api_client.get(URL, {"search": "app", "is_active": "false"})
        assert [c["name"] for c in response.data["results"]] == ["Appliances"]

    def test_invalid_query(self, api_client):
        response = api_client.get(URL, {"limit": "0"})
        assert response.status_code == 400

    def test_huge_page_number(self, api_client, category):
        response = api_client.get(URL, {"page": str(10**19)})
        assert response.status_code == 200
        assert response.data["results"] == []
        assert response.data["pagination"]["total_items"] == 1
