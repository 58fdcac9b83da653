"""API schemas for the storefront API.

Pydantic models for response validation and serialization.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from storefront.catalog.query import PAGE_SIZE, SortKey, ViewMode


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Catalog Schemas
# ============================================================================


class ImageSchema(BaseModel):
    """Product image."""

    url: str
    alt: str | None = None


class CategorySchema(BaseModel):
    """Category document."""

    id: str
    title: str
    slug: str
    featured: bool = False
    status: str = "active"


class ProductSchema(BaseModel):
    """Product document as listed on storefront pages."""

    id: str
    name: str
    slug: str
    description: str | None = None
    price: int = Field(..., description="Regular price in minor currency units")
    sale_price: int | None = Field(default=None, description="Sale price, if on sale")
    sku: str | None = None
    category: CategorySchema | str | None = Field(
        default=None, description="Embedded category, or its id"
    )
    images: list[ImageSchema] = Field(default_factory=list)
    featured: bool = False
    status: str
    inventory_quantity: int = 0
    track_quantity: bool = True
    sizes: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    brand: str | None = None
    rating: float | None = None
    review_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_on_sale(self) -> bool:
        """Check if product has a sale price."""
        return self.sale_price is not None


class PageSlotSchema(BaseModel):
    """One position of the pagination window."""

    slot: int = Field(..., ge=1, le=3)
    page_num: int
    is_current_page: bool
    is_valid_page: bool
    href: str | None = Field(default=None, description="Link, null for placeholders")


class PaginationSchema(BaseModel):
    """Pagination metadata for a listing."""

    total_count: int = Field(..., description="Total number of matching products")
    current_page: int = Field(..., description="Current page number (1-based)")
    total_pages: int = Field(..., description="Total number of pages")
    page_size: int = Field(default=PAGE_SIZE, description="Products per page")
    has_next: bool
    has_prev: bool
    next_href: str | None = None
    prev_href: str | None = None
    window: list[PageSlotSchema] = Field(..., description="3-slot pagination window")


class ProductListResponse(BaseModel):
    """Product listing page."""

    products: list[ProductSchema]
    pagination: PaginationSchema
    categories: list[CategorySchema]
    filters: dict[str, str] = Field(
        default_factory=dict, description="Active listing parameters"
    )
    sort: SortKey
    view: ViewMode


class ProductDetailResponse(BaseModel):
    """Product detail page."""

    product: ProductSchema
    similar_products: list[ProductSchema]


class CategoryListResponse(BaseModel):
    """Active categories."""

    categories: list[CategorySchema]
    total: int


class HomeResponse(BaseModel):
    """Home page content."""

    featured_products: list[ProductSchema]
    featured_categories: list[CategorySchema]


def to_product_schema(doc: dict[str, Any]) -> ProductSchema:
    """Convert a product document to its response schema."""
    return ProductSchema.model_validate(doc)


def to_category_schema(doc: dict[str, Any]) -> CategorySchema:
    """Convert a category document to its response schema."""
    return CategorySchema.model_validate(doc)
