"""Catalog exceptions.

Errors raised by the document store and the catalog service. Listing
lookups catch DocumentStoreError and degrade to empty results; the API
layer maps the rest to HTTP error responses.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Document Store Errors
# ============================================================================


class DocumentStoreError(CatalogError):
    """Raised when the document store cannot answer a query.

    Covers backend failures such as a lost database connection.
    """

    def __init__(
        self,
        collection: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize document store error.

        Args:
            collection: Collection being queried.
            message: Description of the failure.
            details: Optional additional context.
        """
        super().__init__(
            f"Query on '{collection}' failed: {message}",
            details={"collection": collection, **(details or {})},
        )
        self.collection = collection


class InvalidQueryError(DocumentStoreError):
    """Raised when a query references an unknown collection, field or operator."""


# ============================================================================
# Product Errors
# ============================================================================


class ProductNotFoundError(CatalogError):
    """Raised when no product matches the requested slug."""

    def __init__(self, slug: str) -> None:
        """Initialize product not found error.

        Args:
            slug: Slug that was looked up.
        """
        super().__init__(
            f"Product not found: {slug}",
            details={"slug": slug},
        )
        self.slug = slug
