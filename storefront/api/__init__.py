"""API layer module.

Contains FastAPI routers, middleware and response schemas.
"""

from storefront.api.categories import router as categories_router
from storefront.api.health import router as health_router
from storefront.api.home import router as home_router
from storefront.api.middleware import setup_middleware
from storefront.api.products import router as products_router

__all__ = [
    "categories_router",
    "health_router",
    "home_router",
    "products_router",
    "setup_middleware",
]
