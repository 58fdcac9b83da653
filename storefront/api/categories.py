"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from storefront.api.schemas import CategoryListResponse, to_category_schema
from storefront.catalog.service import CatalogService, get_catalog_service

router = APIRouter(prefix="/categories", tags=["Categories"])


def get_service() -> CatalogService:
    """Get catalog service."""
    return get_catalog_service()


@router.get(
    "",
    response_model=CategoryListResponse,
    summary="List categories",
    description="List active categories offered as listing filters.",
)
async def list_categories(
    service: Annotated[CatalogService, Depends(get_service)],
) -> CategoryListResponse:
    """List active categories.

    Args:
        service: Catalog service.

    Returns:
        Active categories; empty when the store is unavailable.
    """
    categories = await service.get_categories()
    return CategoryListResponse(
        categories=[to_category_schema(doc) for doc in categories],
        total=len(categories),
    )
