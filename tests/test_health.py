"""Tests for health check endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

import storefront.infrastructure.document_store as document_store_module
from storefront.catalog.exceptions import DocumentStoreError
from storefront.catalog.store import DocumentStore
from storefront.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(app)


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "storefront-api"
    assert "version" in data


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint queries the demo catalog."""
    response = client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["store"] == "memory"


def test_readiness_check_store_down(client: TestClient) -> None:
    """Test readiness endpoint reports an unavailable store."""
    store = MagicMock(spec=DocumentStore)
    store.find = AsyncMock(side_effect=DocumentStoreError("categories", "connection refused"))
    document_store_module._document_store = store

    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"
