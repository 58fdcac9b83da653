"""Tests for API middleware."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.api.middleware import setup_middleware


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    def test_generates_request_id_if_not_provided(self, client: TestClient) -> None:
        """Should generate request ID if not in request headers."""
        response = client.get("/health")
        assert response.status_code == 200
        assert "X-Request-ID" in response.headers
        # UUID format
        request_id = response.headers["X-Request-ID"]
        assert len(request_id) == 36

    def test_uses_provided_request_id(self, client: TestClient) -> None:
        """Should use request ID from request headers."""
        custom_id = "custom-request-id-12345"
        response = client.get(
            "/products",
            headers={"X-Request-ID": custom_id},
        )
        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == custom_id

    def test_endpoints_are_public(self, client: TestClient) -> None:
        """Storefront endpoints need no authentication."""
        for path in ("/products", "/categories", "/home", "/health"):
            assert client.get(path).status_code == 200


class TestErrorHandlerMiddleware:
    """Tests for the catch-all error handler."""

    @pytest.fixture
    def broken_client(self) -> TestClient:
        """Create client for an app whose only route raises."""
        app = FastAPI()
        setup_middleware(app)

        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError("boom")

        return TestClient(app)

    def test_unhandled_exception_returns_500(self, broken_client: TestClient) -> None:
        """Unhandled exceptions become INTERNAL_ERROR responses."""
        response = broken_client.get("/boom", headers={"X-Request-ID": "req-500"})
        assert response.status_code == 500

        data = response.json()
        assert data["error_code"] == "INTERNAL_ERROR"
        assert data["request_id"] == "req-500"
        assert response.headers["X-Request-ID"] == "req-500"
