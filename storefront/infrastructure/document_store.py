"""Document store wiring.

Chooses the document store backend from settings and keeps one instance
per process.
"""

import structlog

from storefront.catalog.generator import CatalogGenerator, GeneratorConfig
from storefront.catalog.store import CATEGORIES, PRODUCTS, DocumentStore, InMemoryDocumentStore
from storefront.infrastructure.config import settings

logger = structlog.get_logger()

STORE_BACKENDS = ("memory", "postgres")

_document_store: DocumentStore | None = None


def create_memory_store(config: GeneratorConfig | None = None) -> InMemoryDocumentStore:
    """Create an in-memory store holding the demo catalog.

    Args:
        config: Generator configuration (from settings if not provided).

    Returns:
        Seeded InMemoryDocumentStore.
    """
    config = config or GeneratorConfig(
        seed=settings.catalog_seed,
        products_per_category=settings.products_per_category,
    )
    catalog = CatalogGenerator(config).generate()

    store = InMemoryDocumentStore()
    store.load(CATEGORIES, catalog.categories)
    store.load(PRODUCTS, catalog.products)

    logger.info(
        "Loaded demo catalog",
        seed=config.seed,
        categories=len(catalog.categories),
        products=len(catalog.products),
    )
    return store


def get_document_store() -> DocumentStore:
    """Get the document store singleton.

    Returns:
        Document store for the configured backend.

    Raises:
        ValueError: If the configured backend is unknown.
    """
    global _document_store
    if _document_store is None:
        backend = settings.store_backend.lower()
        if backend == "memory":
            _document_store = create_memory_store()
        elif backend == "postgres":
            from storefront.catalog.repository import SqlDocumentStore
            from storefront.infrastructure.database import get_session_factory

            _document_store = SqlDocumentStore(get_session_factory())
        else:
            raise ValueError(
                f"Unknown store backend '{settings.store_backend}', "
                f"expected one of {', '.join(STORE_BACKENDS)}"
            )
        logger.info("Document store ready", backend=backend)
    return _document_store


async def close_document_store() -> None:
    """Close the document store and release database connections."""
    global _document_store
    if _document_store is not None:
        await _document_store.close()
        _document_store = None

    from storefront.infrastructure.database import dispose_engine

    await dispose_engine()
