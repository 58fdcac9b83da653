"""Catalog service for storefront pages.

High-level service that resolves listing requests against the document
store and degrades to empty results when the store fails, so pages show
"no products found" rather than an error.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import structlog

from storefront.catalog.exceptions import DocumentStoreError, ProductNotFoundError
from storefront.catalog.generator import CatalogGenerator, GeneratorConfig
from storefront.catalog.query import (
    ACTIVE_STATUS,
    LISTING_DEPTH,
    PAGE_SIZE,
    CatalogQuery,
    FilterRequest,
    PageResult,
    PageSlot,
    ViewMode,
    build_query,
    page_href,
    paginate,
    pagination_window,
)
from storefront.catalog.store import CATEGORIES, PRODUCTS, DocumentStore

logger = structlog.get_logger()

# Lookup limits used by the storefront pages
CATEGORY_LIST_LIMIT = 100
SIMILAR_PRODUCTS_LIMIT = 4
FEATURED_PRODUCTS_LIMIT = 8
FEATURED_CATEGORIES_LIMIT = 6


@dataclass
class ProductListing:
    """Everything the product listing page renders.

    Attributes:
        request: Listing parameters the page was built from.
        page: Products on this page with pagination metadata.
        pagination: 3-slot pagination window.
        categories: Active categories for the filter sidebar.
        next_href: Link to the next page, if any.
        prev_href: Link to the previous page, if any.
    """

    request: FilterRequest
    page: PageResult[dict[str, Any]]
    pagination: list[PageSlot]
    categories: list[dict[str, Any]] = field(default_factory=list)
    next_href: str | None = None
    prev_href: str | None = None

    @property
    def view_mode(self) -> ViewMode:
        """Get the grid/list presentation requested."""
        return self.request.view_mode


@dataclass
class ProductDetail:
    """Product detail page content."""

    product: dict[str, Any]
    similar_products: list[dict[str, Any]] = field(default_factory=list)


class CatalogService:
    """Service for storefront catalog operations.

    Example usage:
        service = CatalogService(get_document_store())
        listing = await service.list_products(
            FilterRequest(category="men", sort="price-low", page="2"),
        )
    """

    def __init__(self, store: DocumentStore, page_size: int = PAGE_SIZE) -> None:
        """Initialize service with a document store.

        Args:
            store: Document store holding products and categories.
            page_size: Products per listing page.
        """
        self.store = store
        self.page_size = page_size

    # ------------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------------

    async def resolve_category(self, slug: str) -> str | None:
        """Resolve a category slug to its id.

        Args:
            slug: Category slug.

        Returns:
            Category id, or None if no category has this slug.
        """
        result = await self.store.find(
            CATEGORIES,
            where={"slug": {"equals": slug}},
            limit=1,
        )
        if not result.docs:
            # Unknown slug drops the category filter instead of matching nothing
            logger.info("Category not found, ignoring category filter", category=slug)
            return None
        return result.docs[0]["id"]

    async def build_query(self, request: FilterRequest) -> CatalogQuery:
        """Build the listing query, resolving the category slug first.

        Args:
            request: Listing parameters.

        Returns:
            CatalogQuery for the products collection.
        """
        category_id = None
        if request.category:
            category_id = await self.resolve_category(request.category)
        return build_query(request, category_id, self.page_size)

    async def search_products(self, request: FilterRequest) -> PageResult[dict[str, Any]]:
        """Fetch one page of active products matching a listing request.

        Args:
            request: Listing parameters.

        Returns:
            Page of products; an empty page if the store fails.
        """
        try:
            query = await self.build_query(request)
            result = await self.store.find(**query.to_find_args())
        except DocumentStoreError as e:
            logger.exception(
                "Error fetching products",
                params=request.to_params(),
                page=request.page_number,
                error=e.message,
            )
            return PageResult.empty(self.page_size)

        return paginate(
            total_count=result.total_docs,
            page=query.page,
            page_size=self.page_size,
            items=result.docs,
        )

    async def list_products(self, request: FilterRequest) -> ProductListing:
        """Build the product listing page.

        The category list for the filter sidebar is fetched concurrently
        with the slug lookup -> product query chain.

        Args:
            request: Listing parameters.

        Returns:
            ProductListing with products, pagination window and categories.
        """
        categories, page = await asyncio.gather(
            self.get_categories(),
            self.search_products(request),
        )

        params = request.to_params()
        return ProductListing(
            request=request,
            page=page,
            pagination=pagination_window(page.current_page, page.total_pages, params),
            categories=categories,
            next_href=page_href(params, page.next_page) if page.next_page else None,
            prev_href=page_href(params, page.prev_page) if page.prev_page else None,
        )

    async def get_categories(self) -> list[dict[str, Any]]:
        """Get active categories for the filter sidebar.

        Returns:
            Category documents; empty if the store fails.
        """
        try:
            result = await self.store.find(
                CATEGORIES,
                where={"status": {"equals": ACTIVE_STATUS}},
                limit=CATEGORY_LIST_LIMIT,
                depth=1,
            )
        except DocumentStoreError as e:
            logger.exception("Error fetching categories", error=e.message)
            return []
        return result.docs

    # ------------------------------------------------------------------------
    # Product detail
    # ------------------------------------------------------------------------

    async def get_product_by_slug(self, slug: str) -> dict[str, Any]:
        """Get a product by slug, whatever its status.

        Args:
            slug: Product slug.

        Returns:
            Product document with its category embedded.

        Raises:
            ProductNotFoundError: If no product has this slug.
            DocumentStoreError: If the store fails.
        """
        result = await self.store.find(
            PRODUCTS,
            where={"slug": {"equals": slug}},
            limit=1,
            depth=LISTING_DEPTH,
        )
        if not result.docs:
            raise ProductNotFoundError(slug)
        return result.docs[0]

    async def get_similar_products(
        self,
        category_id: str,
        product_id: str,
        limit: int = SIMILAR_PRODUCTS_LIMIT,
    ) -> list[dict[str, Any]]:
        """Get other active products from the same category.

        Args:
            category_id: Category to match.
            product_id: Product to exclude.
            limit: Maximum number of products.

        Returns:
            Product documents; empty if the store fails.
        """
        try:
            result = await self.store.find(
                PRODUCTS,
                where={
                    "and": [
                        {"category": {"equals": category_id}},
                        {"id": {"not_equals": product_id}},
                        {"status": {"equals": ACTIVE_STATUS}},
                    ]
                },
                limit=limit,
                depth=LISTING_DEPTH,
            )
        except DocumentStoreError as e:
            logger.exception(
                "Error fetching similar products",
                category_id=category_id,
                product_id=product_id,
                error=e.message,
            )
            return []
        return result.docs

    async def get_product_detail(self, slug: str) -> ProductDetail:
        """Get a product and products similar to it.

        Args:
            slug: Product slug.

        Returns:
            ProductDetail.

        Raises:
            ProductNotFoundError: If no product has this slug.
        """
        product = await self.get_product_by_slug(slug)

        category = product.get("category")
        category_id = category.get("id") if isinstance(category, dict) else category
        similar = []
        if category_id:
            similar = await self.get_similar_products(category_id, product["id"])

        return ProductDetail(product=product, similar_products=similar)

    # ------------------------------------------------------------------------
    # Home page
    # ------------------------------------------------------------------------

    async def get_featured_products(
        self,
        limit: int = FEATURED_PRODUCTS_LIMIT,
    ) -> list[dict[str, Any]]:
        """Get featured active products.

        Args:
            limit: Maximum number of products.

        Returns:
            Product documents; empty if the store fails.
        """
        try:
            result = await self.store.find(
                PRODUCTS,
                where={
                    "and": [
                        {"featured": {"equals": True}},
                        {"status": {"equals": ACTIVE_STATUS}},
                    ]
                },
                limit=limit,
                depth=LISTING_DEPTH,
            )
        except DocumentStoreError as e:
            logger.exception("Error fetching featured products", error=e.message)
            return []
        return result.docs

    async def get_featured_categories(
        self,
        limit: int = FEATURED_CATEGORIES_LIMIT,
    ) -> list[dict[str, Any]]:
        """Get featured active categories.

        Args:
            limit: Maximum number of categories.

        Returns:
            Category documents; empty if the store fails.
        """
        try:
            result = await self.store.find(
                CATEGORIES,
                where={
                    "and": [
                        {"featured": {"equals": True}},
                        {"status": {"equals": ACTIVE_STATUS}},
                    ]
                },
                limit=limit,
                depth=1,
            )
        except DocumentStoreError as e:
            logger.exception("Error fetching featured categories", error=e.message)
            return []
        return result.docs

    # ------------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------------

    async def seed_catalog(
        self,
        config: GeneratorConfig | None = None,
        clear_existing: bool = True,
    ) -> dict[str, Any]:
        """Seed the demo catalog.

        Args:
            config: Generator configuration (small catalog by default).
            clear_existing: Whether to delete existing products and categories first.

        Returns:
            Seeding result with counts.
        """
        config = config or GeneratorConfig.small()

        deleted = 0
        if clear_existing:
            # Products reference categories, so they go first
            deleted = await self.store.delete(PRODUCTS)
            await self.store.delete(CATEGORIES)
            logger.info("Cleared catalog", deleted_products=deleted)

        catalog = CatalogGenerator(config).generate()

        for category in catalog.categories:
            await self.store.create(CATEGORIES, category)
        for product in catalog.products:
            await self.store.create(PRODUCTS, product)

        result = {
            "seed": config.seed,
            "deleted": deleted,
            "categories_created": len(catalog.categories),
            "products_created": len(catalog.products),
            "active_products": sum(
                1 for p in catalog.products if p["status"] == ACTIVE_STATUS
            ),
            "on_sale": sum(1 for p in catalog.products if p["sale_price"] is not None),
        }
        logger.info("Seeded catalog", **result)
        return result


def get_catalog_service() -> CatalogService:
    """Get catalog service bound to the configured document store.

    Returns:
        CatalogService instance.
    """
    from storefront.infrastructure.document_store import get_document_store

    return CatalogService(get_document_store())
