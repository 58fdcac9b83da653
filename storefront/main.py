"""Storefront API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api import (
    categories_router,
    health_router,
    home_router,
    products_router,
    setup_middleware,
)
from storefront.catalog.exceptions import DocumentStoreError
from storefront.infrastructure.config import settings
from storefront.infrastructure.document_store import close_document_store, get_document_store
from storefront.infrastructure.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    configure_logging()

    # Startup
    logger.info(
        "Starting Storefront API",
        version=settings.api_version,
        environment=settings.environment,
        store_backend=settings.store_backend,
        debug=settings.debug,
    )
    get_document_store()

    yield

    # Shutdown
    logger.info("Shutting down Storefront API")
    await close_document_store()


app = FastAPI(
    title="Storefront API",
    description="Storefront catalog: product listing, detail, categories and home page",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(home_router)
app.include_router(products_router)
app.include_router(categories_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    request_id = getattr(request.state, "request_id", None)

    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": request_id,
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(DocumentStoreError)
async def document_store_exception_handler(
    request: Request, exc: DocumentStoreError
) -> JSONResponse:
    """Handle store failures outside the degrading listing lookups."""
    request_id = getattr(request.state, "request_id", None)

    logger.error(
        "Document store unavailable",
        path=request.url.path,
        collection=exc.collection,
        error=exc.message,
    )

    return JSONResponse(
        status_code=503,
        content={
            "error_code": "STORE_UNAVAILABLE",
            "message": "The catalog is temporarily unavailable",
            "details": [],
            "request_id": request_id,
        },
    )
