"""Catalog query builder.

Translates listing request parameters into a single document-store query,
and shapes the store's answer into a page of products plus the 3-slot
pagination window rendered under the product grid.

Everything here is pure: category slug resolution and the store round trip
live in the catalog service.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar
from urllib.parse import urlencode

import structlog

T = TypeVar("T")

logger = structlog.get_logger()


# ============================================================================
# Constants
# ============================================================================

# 3x3 grid layout
PAGE_SIZE = 9

# Number of page links shown under the grid
WINDOW_SLOTS = 3

PRODUCTS_COLLECTION = "products"
LISTING_PATH = "/products"

# Relationship depth requested for listed products (category embedded)
LISTING_DEPTH = 2

ACTIVE_STATUS = "active"

# Request parameters carried over into pagination links, in link order
LISTING_PARAMS = (
    "category",
    "search",
    "sizes",
    "colors",
    "brand",
    "rating",
    "onSale",
    "sort",
    "view",
)


class SortKey(str, Enum):
    """Sort options offered by the listing."""

    LATEST = "latest"
    POPULARITY = "popularity"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    NAME_AZ = "name-az"
    NAME_ZA = "name-za"
    RATING = "rating"


# Sort key -> store sort field ("-" prefix means descending)
SORT_FIELDS: dict[SortKey, str] = {
    SortKey.LATEST: "-created_at",
    SortKey.POPULARITY: "-review_count",
    SortKey.PRICE_LOW: "price",
    SortKey.PRICE_HIGH: "-price",
    SortKey.NAME_AZ: "name",
    SortKey.NAME_ZA: "-name",
    SortKey.RATING: "-rating",
}


class ViewMode(str, Enum):
    """Presentation of the product grid."""

    GRID = "grid"
    LIST = "list"


# ============================================================================
# Parameter Parsing
# ============================================================================


def parse_sort_key(value: str | None) -> SortKey:
    """Map a raw sort parameter to a sort key.

    Args:
        value: Raw ``sort`` parameter.

    Returns:
        Matching SortKey, or LATEST for absent/unknown values.
    """
    try:
        return SortKey(value)
    except ValueError:
        return SortKey.LATEST


def resolve_sort(value: str | None) -> str:
    """Get the store sort field for a raw sort parameter."""
    return SORT_FIELDS[parse_sort_key(value)]


def parse_page(value: str | int | None) -> int:
    """Parse a 1-based page number.

    Args:
        value: Raw ``page`` parameter.

    Returns:
        Page number, 1 when absent or non-numeric, clamped to at least 1.
    """
    if value is None:
        return 1
    try:
        page = int(value)
    except (TypeError, ValueError):
        return 1
    return max(page, 1)


def parse_rating(value: str | None) -> float | None:
    """Parse a minimum rating threshold.

    Args:
        value: Raw ``rating`` parameter.

    Returns:
        Threshold as float, or None if absent, non-numeric or not finite.
    """
    if value is None or value == "":
        return None
    try:
        rating = float(value)
    except ValueError:
        return None
    if not math.isfinite(rating):
        return None
    return rating


def parse_view_mode(value: str | None) -> ViewMode:
    """Map a raw view parameter to a view mode (grid by default)."""
    try:
        return ViewMode(value)
    except ValueError:
        return ViewMode.GRID


# ============================================================================
# Filter Request
# ============================================================================


@dataclass(frozen=True)
class FilterRequest:
    """Listing parameters as received from the query string.

    All fields are optional strings; absence means "no constraint".

    Attributes:
        category: Category slug.
        search: Free text matched against product names.
        sizes: Size that must be offered.
        colors: Color that must be offered.
        brand: Exact brand.
        rating: Minimum rating threshold.
        on_sale: ``"true"`` restricts to products with a sale price.
        sort: Sort key.
        page: 1-based page number.
        view: ``grid`` or ``list`` (presentation only).
    """

    category: str | None = None
    search: str | None = None
    sizes: str | None = None
    colors: str | None = None
    brand: str | None = None
    rating: str | None = None
    on_sale: str | None = None
    sort: str | None = None
    page: str | int | None = None
    view: str | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "FilterRequest":
        """Build a request from query-string style parameters.

        Args:
            params: Mapping using HTTP parameter names (``onSale``).

        Returns:
            FilterRequest with unknown keys ignored.
        """
        return cls(
            category=params.get("category"),
            search=params.get("search"),
            sizes=params.get("sizes"),
            colors=params.get("colors"),
            brand=params.get("brand"),
            rating=params.get("rating"),
            on_sale=params.get("onSale"),
            sort=params.get("sort"),
            page=params.get("page"),
            view=params.get("view"),
        )

    @property
    def page_number(self) -> int:
        """Get the parsed page number."""
        return parse_page(self.page)

    @property
    def sort_key(self) -> SortKey:
        """Get the effective sort key."""
        return parse_sort_key(self.sort)

    @property
    def view_mode(self) -> ViewMode:
        """Get the effective view mode."""
        return parse_view_mode(self.view)

    @property
    def is_on_sale(self) -> bool:
        """Check whether the on-sale toggle is set."""
        return self.on_sale == "true"

    def to_params(self) -> dict[str, str]:
        """Get non-empty listing parameters, page excluded.

        Returns:
            Ordered mapping of HTTP parameter names to values.
        """
        values = {
            "category": self.category,
            "search": self.search,
            "sizes": self.sizes,
            "colors": self.colors,
            "brand": self.brand,
            "rating": self.rating,
            "onSale": self.on_sale,
            "sort": self.sort,
            "view": self.view,
        }
        return {name: values[name] for name in LISTING_PARAMS if values[name]}


# ============================================================================
# Catalog Query
# ============================================================================


@dataclass(frozen=True)
class CatalogQuery:
    """Structured query handed to the document store.

    Attributes:
        where: Conjunction of field constraints.
        sort: Sort field, "-" prefixed for descending.
        page: 1-based page number.
        limit: Page size.
        depth: Relationship depth to populate.
        collection: Collection to query.
    """

    where: dict[str, Any]
    sort: str = SORT_FIELDS[SortKey.LATEST]
    page: int = 1
    limit: int = PAGE_SIZE
    depth: int = LISTING_DEPTH
    collection: str = PRODUCTS_COLLECTION

    def to_find_args(self) -> dict[str, Any]:
        """Get keyword arguments for ``DocumentStore.find``."""
        return {
            "collection": self.collection,
            "where": self.where,
            "sort": self.sort,
            "limit": self.limit,
            "page": self.page,
            "depth": self.depth,
        }


def build_where(request: FilterRequest, category_id: str | None = None) -> dict[str, Any]:
    """Build the product predicate for a listing request.

    Args:
        request: Listing parameters.
        category_id: Id the category slug resolved to, if any. An
            unresolved slug drops the category constraint.

    Returns:
        Where clause; always constrains ``status`` to active.
    """
    where: dict[str, Any] = {"status": {"equals": ACTIVE_STATUS}}

    if category_id is not None:
        where["category"] = {"equals": category_id}

    if request.search:
        where["name"] = {"contains": request.search}

    if request.sizes:
        where["sizes"] = {"contains": request.sizes.lower()}

    if request.colors:
        where["colors"] = {"contains": request.colors.lower()}

    if request.brand:
        where["brand"] = {"equals": request.brand}

    if request.rating:
        rating = parse_rating(request.rating)
        if rating is None:
            logger.warning("Ignoring invalid rating filter", rating=request.rating)
        else:
            where["rating"] = {"greater_than_equal": rating}

    if request.is_on_sale:
        where["sale_price"] = {"exists": True}

    return where


def build_query(
    request: FilterRequest,
    category_id: str | None = None,
    page_size: int = PAGE_SIZE,
) -> CatalogQuery:
    """Build the complete listing query.

    Args:
        request: Listing parameters.
        category_id: Resolved category id, if any.
        page_size: Products per page.

    Returns:
        CatalogQuery for the products collection.
    """
    return CatalogQuery(
        where=build_where(request, category_id),
        sort=resolve_sort(request.sort),
        page=request.page_number,
        limit=page_size,
    )


# ============================================================================
# Pagination
# ============================================================================


@dataclass(frozen=True)
class PageResult(Generic[T]):
    """One page of listed items plus pagination metadata.

    Attributes:
        items: Items on this page.
        total_count: Total number of matching items.
        current_page: Current page (1-based).
        total_pages: Total number of pages.
        page_size: Items per page.
    """

    items: list[T]
    total_count: int
    current_page: int
    total_pages: int
    page_size: int = PAGE_SIZE

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.current_page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.current_page > 1

    @property
    def next_page(self) -> int | None:
        """Get the next page number, if any."""
        return self.current_page + 1 if self.has_next else None

    @property
    def prev_page(self) -> int | None:
        """Get the previous page number, if any."""
        return self.current_page - 1 if self.has_prev else None

    @classmethod
    def empty(cls, page_size: int = PAGE_SIZE) -> "PageResult[T]":
        """Get the result shown when the listing cannot be loaded."""
        return cls(items=[], total_count=0, current_page=1, total_pages=0, page_size=page_size)


def paginate(
    total_count: int,
    page: int,
    page_size: int = PAGE_SIZE,
    items: Sequence[T] = (),
) -> PageResult[T]:
    """Compute pagination metadata for a page of results.

    Args:
        total_count: Total number of matching items.
        page: Requested page; values below 1 are clamped to 1.
        page_size: Items per page.
        items: Items on the requested page.

    Returns:
        PageResult with ``total_pages = ceil(total_count / page_size)``.
    """
    page = max(page, 1)
    total_pages = max(math.ceil(total_count / page_size), 0) if page_size > 0 else 0
    return PageResult(
        items=list(items),
        total_count=total_count,
        current_page=page,
        total_pages=total_pages,
        page_size=page_size,
    )


@dataclass(frozen=True)
class PageSlot:
    """One position of the pagination window.

    Attributes:
        slot: Position in the window (1-3).
        page_num: Page linked from this slot, or the slot ordinal for an
            inactive placeholder.
        is_current_page: Whether ``page_num`` is the current page.
        is_valid_page: Whether ``page_num`` exists.
        href: Link to the page, None for inactive placeholders.
    """

    slot: int
    page_num: int
    is_current_page: bool
    is_valid_page: bool
    href: str | None = field(default=None)


def page_href(params: Mapping[str, str], page: int, path: str = LISTING_PATH) -> str:
    """Build a listing link that keeps the filters and sets the page.

    Args:
        params: Listing parameters to keep.
        page: Target page.
        path: Listing path.

    Returns:
        Relative URL.
    """
    query = {name: value for name, value in params.items() if name != "page"}
    query["page"] = str(page)
    return f"{path}?{urlencode(query)}"


def window_pages(current_page: int, total_pages: int) -> list[int]:
    """Get the page numbers the window should show.

    Args:
        current_page: Current page.
        total_pages: Total number of pages.

    Returns:
        Up to three page numbers.
    """
    if total_pages <= WINDOW_SLOTS:
        return list(range(1, total_pages + 1))
    if current_page <= 2:
        return [1, 2, 3]
    if current_page >= total_pages - 1:
        return [total_pages - 2, total_pages - 1, total_pages]
    return [current_page - 1, current_page, current_page + 1]


def pagination_window(
    current_page: int,
    total_pages: int,
    params: Mapping[str, str] | None = None,
) -> list[PageSlot]:
    """Compute the 3-slot pagination window.

    The window always has exactly three slots. Slots past the last page
    become inactive placeholders showing their ordinal.

    Args:
        current_page: Current page.
        total_pages: Total number of pages.
        params: Listing parameters kept in slot links.

    Returns:
        Three PageSlot entries, in display order.
    """
    pages = window_pages(current_page, total_pages)
    params = params or {}

    slots = []
    for slot in range(1, WINDOW_SLOTS + 1):
        page_num = pages[slot - 1] if slot <= len(pages) else slot
        is_valid_page = page_num <= total_pages
        slots.append(
            PageSlot(
                slot=slot,
                page_num=page_num,
                is_current_page=page_num == current_page,
                is_valid_page=is_valid_page,
                href=page_href(params, page_num) if is_valid_page else None,
            )
        )
    return slots
