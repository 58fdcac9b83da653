"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from storefront.catalog.exceptions import DocumentStoreError
from storefront.catalog.store import CATEGORIES
from storefront.infrastructure.config import settings
from storefront.infrastructure.document_store import get_document_store

logger = structlog.get_logger()

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="storefront-api",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check() -> JSONResponse:
    """Check if service is ready to accept requests.

    Runs a one-document query against the document store.

    Returns:
        Readiness status; 503 when the store cannot be queried.
    """
    try:
        await get_document_store().find(CATEGORIES, limit=1)
    except DocumentStoreError as e:
        logger.warning("Readiness check failed", error=e.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "store": settings.store_backend},
        )
    return JSONResponse(content={"status": "ready", "store": settings.store_backend})
