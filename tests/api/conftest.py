"""Shared fixtures for API tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

import storefront.infrastructure.document_store as document_store_module
from storefront.catalog.exceptions import DocumentStoreError
from storefront.catalog.store import DocumentStore, InMemoryDocumentStore
from storefront.main import app


@pytest.fixture
def client(memory_store: InMemoryDocumentStore) -> TestClient:
    """Create test client serving the test catalog."""
    document_store_module._document_store = memory_store
    return TestClient(app)


@pytest.fixture
def failing_client() -> TestClient:
    """Create test client whose document store is down."""
    store = MagicMock(spec=DocumentStore)
    store.find = AsyncMock(side_effect=DocumentStoreError("products", "connection refused"))
    document_store_module._document_store = store
    return TestClient(app)
