"""Shared fixtures for storefront tests."""

from datetime import datetime, timedelta, timezone
from typing import Any, Iterator

import pytest

import storefront.infrastructure.document_store as document_store_module
from storefront.catalog.store import CATEGORIES, PRODUCTS, InMemoryDocumentStore

EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)

APPAREL_ID = "11111111-1111-1111-1111-111111111111"
SHOES_ID = "22222222-2222-2222-2222-222222222222"
ARCHIVED_ID = "33333333-3333-3333-3333-333333333333"


def make_category(category_id: str, title: str, **overrides: Any) -> dict[str, Any]:
    """Build a category document."""
    doc = {
        "id": category_id,
        "title": title,
        "slug": title.lower(),
        "featured": False,
        "status": "active",
        "created_at": EPOCH,
        "updated_at": EPOCH,
    }
    doc.update(overrides)
    return doc


def make_product(index: int, **overrides: Any) -> dict[str, Any]:
    """Build product number ``index`` of the test catalog.

    Products 1-10 are apparel, 11-15 are shoes. Every third product is on
    sale; odd products come in s/m and red, even ones in l/xl and blue/black.
    """
    doc = {
        "id": f"00000000-0000-0000-0000-{index:012d}",
        "name": f"Product {index:02d}",
        "slug": f"product-{index:02d}",
        "description": f"Test product {index}",
        "price": 1000 * index,
        "sale_price": 500 * index if index % 3 == 0 else None,
        "sku": f"SKU-{index:03d}",
        "category": APPAREL_ID if index <= 10 else SHOES_ID,
        "images": [{"url": f"https://example.com/{index}.jpg", "alt": f"Product {index:02d}"}],
        "featured": index in (1, 2),
        "status": "active",
        "inventory_quantity": 10,
        "track_quantity": True,
        "sizes": ["s", "m"] if index % 2 else ["l", "xl"],
        "colors": ["red"] if index % 2 else ["blue", "black"],
        "brand": "nike" if index <= 5 else "adidas" if index <= 10 else "puma",
        "rating": float(1 + index % 5),
        "review_count": 10 * index,
        "created_at": EPOCH + timedelta(hours=index),
        "updated_at": EPOCH + timedelta(hours=index),
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def categories() -> list[dict[str, Any]]:
    """Categories of the test catalog; one of them archived."""
    return [
        make_category(APPAREL_ID, "Apparel", featured=True),
        make_category(SHOES_ID, "Shoes"),
        make_category(ARCHIVED_ID, "Archived", status="inactive"),
    ]


@pytest.fixture
def products() -> list[dict[str, Any]]:
    """15 active products plus two that must never be listed."""
    return [make_product(i) for i in range(1, 16)] + [
        make_product(16, status="inactive", featured=True),
        make_product(17, status="out-of-stock"),
    ]


@pytest.fixture
def memory_store(
    categories: list[dict[str, Any]],
    products: list[dict[str, Any]],
) -> InMemoryDocumentStore:
    """In-memory store loaded with the test catalog."""
    store = InMemoryDocumentStore()
    store.load(CATEGORIES, categories)
    store.load(PRODUCTS, products)
    return store


@pytest.fixture
def product_factory() -> Any:
    """Get the product document builder."""
    return make_product


@pytest.fixture(autouse=True)
def reset_document_store() -> Iterator[None]:
    """Reset the document store singleton around each test."""
    document_store_module._document_store = None
    yield
    document_store_module._document_store = None
