"""Home page endpoint."""

import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from storefront.api.schemas import HomeResponse, to_category_schema, to_product_schema
from storefront.catalog.service import CatalogService, get_catalog_service

router = APIRouter(tags=["Home"])


def get_service() -> CatalogService:
    """Get catalog service."""
    return get_catalog_service()


@router.get(
    "/home",
    response_model=HomeResponse,
    summary="Get home page content",
    description="Featured products and featured categories.",
)
async def get_home(
    service: Annotated[CatalogService, Depends(get_service)],
) -> HomeResponse:
    """Get home page content.

    Both lookups run concurrently and each degrades to an empty list.

    Args:
        service: Catalog service.

    Returns:
        Featured products (up to 8) and categories (up to 6).
    """
    products, categories = await asyncio.gather(
        service.get_featured_products(),
        service.get_featured_categories(),
    )
    return HomeResponse(
        featured_products=[to_product_schema(doc) for doc in products],
        featured_categories=[to_category_schema(doc) for doc in categories],
    )
