"""Tests for category and home page endpoints."""

from fastapi.testclient import TestClient


class TestListCategories:
    """Tests for GET /categories."""

    def test_active_categories(self, client: TestClient) -> None:
        """Only active categories are listed."""
        response = client.get("/categories")
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 2
        assert sorted(c["slug"] for c in data["categories"]) == ["apparel", "shoes"]

    def test_store_failure(self, failing_client: TestClient) -> None:
        """A failing store yields an empty list."""
        response = failing_client.get("/categories")
        assert response.status_code == 200
        assert response.json() == {"categories": [], "total": 0}


class TestHome:
    """Tests for GET /home."""

    def test_featured_content(self, client: TestClient) -> None:
        """Home page lists featured active products and categories."""
        response = client.get("/home")
        assert response.status_code == 200

        data = response.json()
        assert sorted(p["slug"] for p in data["featured_products"]) == [
            "product-01",
            "product-02",
        ]
        assert [c["slug"] for c in data["featured_categories"]] == ["apparel"]

    def test_store_failure(self, failing_client: TestClient) -> None:
        """A failing store yields an empty home page."""
        response = failing_client.get("/home")
        assert response.status_code == 200
        assert response.json() == {"featured_products": [], "featured_categories": []}
