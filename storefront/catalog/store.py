"""Document store contract and in-memory implementation.

The catalog talks to its content store through a single ``find`` call
modelled on headless-CMS query APIs: a collection name, a ``where`` clause,
a sort field, and page-based pagination. Where clauses map field names to
``{operator: value}`` conditions and may nest an ``and``/``or`` list.

Example:
    {
        "status": {"equals": "active"},
        "name": {"contains": "shirt"},
        "rating": {"greater_than_equal": 4.0},
    }
"""

import copy
import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from storefront.catalog.exceptions import InvalidQueryError


# ============================================================================
# Collections
# ============================================================================

PRODUCTS = "products"
CATEGORIES = "categories"

# Queryable fields per collection
COLLECTION_FIELDS: dict[str, frozenset[str]] = {
    PRODUCTS: frozenset(
        {
            "id",
            "name",
            "slug",
            "description",
            "price",
            "sale_price",
            "sku",
            "category",
            "images",
            "featured",
            "status",
            "inventory_quantity",
            "track_quantity",
            "sizes",
            "colors",
            "brand",
            "rating",
            "review_count",
            "created_at",
            "updated_at",
        }
    ),
    CATEGORIES: frozenset(
        {"id", "title", "slug", "featured", "status", "created_at", "updated_at"}
    ),
}

# Multi-valued fields; "contains" checks membership
ARRAY_FIELDS: dict[str, frozenset[str]] = {
    PRODUCTS: frozenset({"sizes", "colors"}),
    CATEGORIES: frozenset(),
}

# Relationship fields populated when depth >= 1
RELATIONSHIPS: dict[str, dict[str, str]] = {
    PRODUCTS: {"category": CATEGORIES},
    CATEGORIES: {},
}

OPERATORS = frozenset(
    {"equals", "not_equals", "contains", "greater_than_equal", "exists"}
)

LOGICAL_KEYS = frozenset({"and", "or"})


def validate_where(collection: str, where: dict[str, Any] | None) -> None:
    """Check that a where clause only uses known fields and operators.

    Args:
        collection: Collection being queried.
        where: Where clause to check.

    Raises:
        InvalidQueryError: If the collection, a field or an operator is unknown.
    """
    if collection not in COLLECTION_FIELDS:
        raise InvalidQueryError(collection, "unknown collection")
    if not where:
        return

    fields = COLLECTION_FIELDS[collection]
    for key, condition in where.items():
        if key in LOGICAL_KEYS:
            if not isinstance(condition, list):
                raise InvalidQueryError(collection, f"'{key}' expects a list of clauses")
            for clause in condition:
                validate_where(collection, clause)
            continue

        if key not in fields:
            raise InvalidQueryError(collection, f"unknown field '{key}'", {"field": key})
        if not isinstance(condition, dict) or not condition:
            raise InvalidQueryError(
                collection, f"field '{key}' expects an operator mapping", {"field": key}
            )
        unknown = set(condition) - OPERATORS
        if unknown:
            raise InvalidQueryError(
                collection,
                f"unknown operator(s) {sorted(unknown)} on '{key}'",
                {"field": key},
            )


def parse_sort(collection: str, sort: str | None) -> tuple[str, bool] | None:
    """Split a sort string into field and direction.

    Args:
        collection: Collection being queried.
        sort: Field name, "-" prefixed for descending.

    Returns:
        (field, descending) tuple, or None when unsorted.

    Raises:
        InvalidQueryError: If the field is unknown.
    """
    if not sort:
        return None
    descending = sort.startswith("-")
    field_name = sort[1:] if descending else sort
    if field_name not in COLLECTION_FIELDS[collection]:
        raise InvalidQueryError(collection, f"unknown sort field '{field_name}'")
    return field_name, descending


# ============================================================================
# Find Result
# ============================================================================


@dataclass
class FindResult:
    """Answer to a ``find`` call.

    Attributes:
        docs: Documents on the requested page.
        total_docs: Total number of matching documents.
        total_pages: Number of pages.
        page: Page returned.
        limit: Page size (0 when unpaginated).
    """

    docs: list[dict[str, Any]]
    total_docs: int
    total_pages: int
    page: int
    limit: int

    @property
    def has_next_page(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1

    @property
    def next_page(self) -> int | None:
        """Get the next page number."""
        return self.page + 1 if self.has_next_page else None

    @property
    def prev_page(self) -> int | None:
        """Get the previous page number."""
        return self.page - 1 if self.has_prev_page else None

    @classmethod
    def build(
        cls,
        docs: list[dict[str, Any]],
        total_docs: int,
        page: int,
        limit: int,
    ) -> "FindResult":
        """Create a result, deriving the page count.

        Args:
            docs: Documents on the page.
            total_docs: Total number of matching documents.
            page: Page returned.
            limit: Page size; 0 or less means everything on one page.

        Returns:
            FindResult.
        """
        if limit <= 0:
            return cls(docs=docs, total_docs=total_docs, total_pages=1, page=1, limit=0)
        return cls(
            docs=docs,
            total_docs=total_docs,
            total_pages=math.ceil(total_docs / limit),
            page=page,
            limit=limit,
        )


# ============================================================================
# Document Store Contract
# ============================================================================


class DocumentStore(ABC):
    """Collection-based content store used by the catalog."""

    @abstractmethod
    async def find(
        self,
        collection: str,
        where: dict[str, Any] | None = None,
        sort: str | None = None,
        limit: int = 10,
        page: int = 1,
        depth: int = 0,
    ) -> FindResult:
        """Find documents matching a where clause.

        Args:
            collection: Collection to query.
            where: Where clause (all documents when empty).
            sort: Sort field, "-" prefixed for descending.
            limit: Page size; 0 or less disables pagination.
            page: 1-based page number.
            depth: Relationship depth to populate.

        Returns:
            Matching documents for the page and pagination metadata.

        Raises:
            InvalidQueryError: On unknown collection, field or operator.
            DocumentStoreError: If the backend fails.
        """

    @abstractmethod
    async def create(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create a document.

        Args:
            collection: Target collection.
            data: Document fields; ``id`` and timestamps are filled in if missing.

        Returns:
            The stored document.
        """

    @abstractmethod
    async def delete(self, collection: str, where: dict[str, Any] | None = None) -> int:
        """Delete documents matching a where clause.

        Args:
            collection: Target collection.
            where: Where clause (all documents when empty).

        Returns:
            Number of deleted documents.
        """

    async def close(self) -> None:
        """Release backend resources."""


# ============================================================================
# In-Memory Store
# ============================================================================


def _contains(value: Any, expected: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple, set)):
        return expected in value
    return str(expected).lower() in str(value).lower()


def _greater_than_equal(value: Any, expected: Any) -> bool:
    if value is None:
        return False
    return value >= expected


def _exists(value: Any, expected: Any) -> bool:
    return (value is not None) == bool(expected)


_MATCHERS: dict[str, Callable[[Any, Any], bool]] = {
    "equals": lambda value, expected: value == expected,
    "not_equals": lambda value, expected: value != expected,
    "contains": _contains,
    "greater_than_equal": _greater_than_equal,
    "exists": _exists,
}


def matches(doc: dict[str, Any], where: dict[str, Any] | None) -> bool:
    """Evaluate a where clause against a stored document.

    Args:
        doc: Document with relationships stored as ids.
        where: Validated where clause.

    Returns:
        True if every condition holds.
    """
    if not where:
        return True

    for key, condition in where.items():
        if key == "and":
            if not all(matches(doc, clause) for clause in condition):
                return False
        elif key == "or":
            if not any(matches(doc, clause) for clause in condition):
                return False
        else:
            value = doc.get(key)
            for operator, expected in condition.items():
                if not _MATCHERS[operator](value, expected):
                    return False
    return True


def sort_documents(
    docs: list[dict[str, Any]],
    field_name: str,
    descending: bool,
) -> list[dict[str, Any]]:
    """Stable sort on one field, documents without a value last."""
    present = [d for d in docs if d.get(field_name) is not None]
    missing = [d for d in docs if d.get(field_name) is None]
    present.sort(key=lambda d: d[field_name], reverse=descending)
    return present + missing


class InMemoryDocumentStore(DocumentStore):
    """Document store holding collections in process memory.

    Serves the seeded demo catalog for local runs and tests. Documents are
    copied on the way in and out, so callers never share state with the store.

    Example usage:
        store = InMemoryDocumentStore()
        await store.create("categories", {"title": "Men", "slug": "men"})
        result = await store.find("categories", where={"slug": {"equals": "men"}})
    """

    def __init__(self) -> None:
        """Initialize empty collections."""
        self._collections: dict[str, list[dict[str, Any]]] = {
            name: [] for name in COLLECTION_FIELDS
        }

    async def find(
        self,
        collection: str,
        where: dict[str, Any] | None = None,
        sort: str | None = None,
        limit: int = 10,
        page: int = 1,
        depth: int = 0,
    ) -> FindResult:
        """Find documents matching a where clause."""
        validate_where(collection, where)
        ordering = parse_sort(collection, sort)

        docs = [d for d in self._collections[collection] if matches(d, where)]
        if ordering is not None:
            docs = sort_documents(docs, *ordering)

        total = len(docs)
        page = max(page, 1)
        if limit > 0:
            start = (page - 1) * limit
            docs = docs[start:start + limit]

        return FindResult.build(
            docs=[self._populate(collection, d, depth) for d in docs],
            total_docs=total,
            page=page,
            limit=limit,
        )

    async def create(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create a document."""
        validate_where(collection, None)
        now = datetime.now(timezone.utc)
        doc = copy.deepcopy(data)
        doc.setdefault("id", str(uuid4()))
        doc.setdefault("created_at", now)
        doc.setdefault("updated_at", now)
        self._collections[collection].append(doc)
        return copy.deepcopy(doc)

    async def delete(self, collection: str, where: dict[str, Any] | None = None) -> int:
        """Delete documents matching a where clause."""
        validate_where(collection, where)
        kept = [d for d in self._collections[collection] if not matches(d, where)]
        deleted = len(self._collections[collection]) - len(kept)
        self._collections[collection] = kept
        return deleted

    def load(self, collection: str, docs: list[dict[str, Any]]) -> None:
        """Add documents to a collection without any defaults.

        Args:
            collection: Target collection.
            docs: Complete documents, ids included.
        """
        validate_where(collection, None)
        self._collections[collection].extend(copy.deepcopy(docs))

    def _populate(self, collection: str, doc: dict[str, Any], depth: int) -> dict[str, Any]:
        """Copy a document, embedding related documents when depth allows."""
        result = copy.deepcopy(doc)
        if depth < 1:
            return result

        for field_name, related in RELATIONSHIPS[collection].items():
            related_id = result.get(field_name)
            if related_id is None:
                continue
            for candidate in self._collections[related]:
                if candidate["id"] == related_id:
                    result[field_name] = self._populate(related, candidate, depth - 1)
                    break
        return result
