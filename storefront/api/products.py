"""Product API endpoints.

Provides the product listing (filter, sort, paginate) and product detail.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from storefront.api.schemas import (
    ErrorResponse,
    PageSlotSchema,
    PaginationSchema,
    ProductDetailResponse,
    ProductListResponse,
    to_category_schema,
    to_product_schema,
)
from storefront.catalog.exceptions import ProductNotFoundError
from storefront.catalog.query import FilterRequest
from storefront.catalog.service import CatalogService, ProductListing, get_catalog_service

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service() -> CatalogService:
    """Get catalog service."""
    return get_catalog_service()


# ============================================================================
# Converters
# ============================================================================


def listing_to_response(listing: ProductListing) -> ProductListResponse:
    """Convert a product listing to response schema."""
    page = listing.page
    return ProductListResponse(
        products=[to_product_schema(doc) for doc in page.items],
        pagination=PaginationSchema(
            total_count=page.total_count,
            current_page=page.current_page,
            total_pages=page.total_pages,
            page_size=page.page_size,
            has_next=page.has_next,
            has_prev=page.has_prev,
            next_href=listing.next_href,
            prev_href=listing.prev_href,
            window=[
                PageSlotSchema(
                    slot=s.slot,
                    page_num=s.page_num,
                    is_current_page=s.is_current_page,
                    is_valid_page=s.is_valid_page,
                    href=s.href,
                )
                for s in listing.pagination
            ],
        ),
        categories=[to_category_schema(doc) for doc in listing.categories],
        filters=listing.request.to_params(),
        sort=listing.request.sort_key,
        view=listing.view_mode,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductListResponse,
    summary="List products",
    description=(
        "List active products with filters, sorting and pagination. "
        "Nine products per page; store failures yield an empty listing."
    ),
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_service)],
    category: Annotated[str | None, Query(description="Category slug")] = None,
    search: Annotated[str | None, Query(description="Text matched against product names")] = None,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    sizes: Annotated[str | None, Query(description="Size that must be offered")] = None,
    colors: Annotated[str | None, Query(description="Color that must be offered")] = None,
    brand: Annotated[str | None, Query(description="Exact brand")] = None,
    rating: Annotated[str | None, Query(description="Minimum rating")] = None,
    on_sale: Annotated[
        str | None, Query(alias="onSale", description="'true' for sale items only")
    ] = None,
    sort: Annotated[
        str | None,
        Query(description="latest, popularity, price-low, price-high, name-az, name-za, rating"),
    ] = None,
    view: Annotated[str | None, Query(description="grid or list")] = None,
) -> ProductListResponse:
    """List products.

    Raw parameters are passed through unvalidated: a bad page falls back to
    page 1, a bad rating or unknown category is ignored, and an unknown sort
    falls back to latest.

    Args:
        service: Catalog service.
        category: Category slug.
        search: Text matched against product names.
        page: Page number.
        sizes: Size filter.
        colors: Color filter.
        brand: Brand filter.
        rating: Minimum rating.
        on_sale: Sale toggle.
        sort: Sort key.
        view: View mode.

    Returns:
        Listing with products, pagination and filter categories.
    """
    request = FilterRequest(
        category=category,
        search=search,
        sizes=sizes,
        colors=colors,
        brand=brand,
        rating=rating,
        on_sale=on_sale,
        sort=sort,
        page=page,
        view=view,
    )
    listing = await service.list_products(request)
    return listing_to_response(listing)


@router.get(
    "/{slug}",
    response_model=ProductDetailResponse,
    responses={
        404: {"model": ErrorResponse},
    },
    summary="Get product details",
    description="Get a product by slug together with similar products.",
)
async def get_product(
    slug: str,
    service: Annotated[CatalogService, Depends(get_service)],
) -> ProductDetailResponse:
    """Get a product by slug.

    Args:
        slug: Product slug.
        service: Catalog service.

    Returns:
        Product and up to four similar products.

    Raises:
        HTTPException: If product not found.
    """
    try:
        detail = await service.get_product_detail(slug)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error_code": "PRODUCT_NOT_FOUND",
                "message": e.message,
                "details": [{"field": "slug", "message": slug}],
            },
        )

    return ProductDetailResponse(
        product=to_product_schema(detail.product),
        similar_products=[to_product_schema(doc) for doc in detail.similar_products],
    )
