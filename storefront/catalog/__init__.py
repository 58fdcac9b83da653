"""Product Catalog.

Provides listing query building, pagination, document stores and
catalog operations for the storefront pages.
"""

from storefront.catalog.exceptions import (
    CatalogError,
    DocumentStoreError,
    InvalidQueryError,
    ProductNotFoundError,
)
from storefront.catalog.generator import CatalogGenerator, GeneratorConfig
from storefront.catalog.query import (
    PAGE_SIZE,
    CatalogQuery,
    FilterRequest,
    PageResult,
    PageSlot,
    SortKey,
    build_query,
    build_where,
    paginate,
    pagination_window,
)
from storefront.catalog.service import CatalogService, ProductDetail, ProductListing
from storefront.catalog.store import DocumentStore, FindResult, InMemoryDocumentStore

__all__ = [
    # Errors
    "CatalogError",
    "DocumentStoreError",
    "InvalidQueryError",
    "ProductNotFoundError",
    # Query
    "PAGE_SIZE",
    "CatalogQuery",
    "FilterRequest",
    "PageResult",
    "PageSlot",
    "SortKey",
    "build_query",
    "build_where",
    "paginate",
    "pagination_window",
    # Store
    "DocumentStore",
    "FindResult",
    "InMemoryDocumentStore",
    # Generator
    "CatalogGenerator",
    "GeneratorConfig",
    # Service
    "CatalogService",
    "ProductDetail",
    "ProductListing",
]
