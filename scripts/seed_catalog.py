#!/usr/bin/env python3
"""Seed demo catalog script.

Writes the deterministic demo catalog (categories and products) into the
PostgreSQL document store.

Usage:
    python scripts/seed_catalog.py --mode small
    python scripts/seed_catalog.py --mode full --seed 7
    python scripts/seed_catalog.py --mode small --no-clear
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storefront.catalog.generator import GeneratorConfig
from storefront.catalog.repository import SqlDocumentStore
from storefront.catalog.service import CatalogService
from storefront.infrastructure.database import create_tables, dispose_engine, get_session_factory
from storefront.infrastructure.logging import configure_logging


def build_config(mode: str, seed: int | None = None) -> GeneratorConfig:
    """Get generator configuration for a catalog size.

    Args:
        mode: Catalog size (small/full).
        seed: Optional seed overriding the default.

    Returns:
        Generator configuration.
    """
    config = GeneratorConfig.full() if mode == "full" else GeneratorConfig.small()
    if seed is not None:
        config.seed = seed
    return config


async def seed(config: GeneratorConfig, clear: bool = True) -> dict:
    """Seed the catalog into PostgreSQL.

    Args:
        config: Generator configuration.
        clear: Whether to clear existing products and categories.

    Returns:
        Seeding result.
    """
    service = CatalogService(SqlDocumentStore(get_session_factory()))
    return await service.seed_catalog(config, clear_existing=clear)


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the storefront demo catalog",
    )
    parser.add_argument(
        "--mode",
        choices=["small", "full"],
        default="small",
        help="Catalog size: small (5 per category) or full (20 per category)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't clear existing products and categories before seeding",
    )

    args = parser.parse_args()
    configure_logging()
    config = build_config(args.mode, args.seed)

    print("=" * 60)
    print("Storefront Catalog Seeder")
    print("=" * 60)
    print(f"Mode: {args.mode}")
    print(f"Seed: {config.seed}")
    print(f"Clear existing: {not args.no_clear}")
    print()

    # Create tables
    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    try:
        result = await seed(config, clear=not args.no_clear)
    finally:
        await dispose_engine()

    print(f"  ✓ Deleted: {result['deleted']} existing products")
    print(f"  ✓ Categories: {result['categories_created']}")
    print(f"  ✓ Products: {result['products_created']}")
    print(f"  ✓ Active: {result['active_products']}")
    print(f"  ✓ On sale: {result['on_sale']}")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
