"""Demo catalog generator with deterministic seeding.

Generates storefront categories and products as store documents. Uses
seeded random for reproducibility, so the same seed always yields the same
ids, names, prices and timestamps.
"""

import hashlib
import random
import re
import unicodedata
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Iterator
from uuid import UUID


# ============================================================================
# Constants
# ============================================================================

# Storefront categories: (title, featured)
CATEGORIES = [
    ("Men", True),
    ("Women", True),
    ("Kids", True),
    ("Accessories", False),
    ("Shoes", True),
    ("Bags", False),
]

BRANDS = ["nike", "adidas", "puma"]

SIZES = ["s", "m", "l", "xl"]

COLORS = ["red", "blue", "green", "black"]

# Categories whose products come without sizes
UNSIZED_CATEGORIES = {"Accessories", "Bags"}

# Price ranges by category (in minor units)
PRICE_RANGES: dict[str, tuple[int, int]] = {
    "Men": (7999, 39999),
    "Women": (9999, 45999),
    "Kids": (3999, 14999),
    "Accessories": (1999, 19999),
    "Shoes": (14999, 59999),
    "Bags": (9999, 69999),
}

# Product name templates by category
PRODUCT_TEMPLATES: dict[str, list[str]] = {
    "Men": ["{adj} Men's T-Shirt", "{adj} Casual Trousers", "{adj} Men's Hoodie"],
    "Women": ["{adj} Blouse", "{adj} Evening Dress", "{adj} Women's Jacket"],
    "Kids": ["{adj} Kids T-Shirt", "{adj} Kids Shorts", "{adj} Kids Sweater"],
    "Accessories": ["{adj} Cap", "{adj} Scarf", "{adj} Belt"],
    "Shoes": ["{adj} Sneakers", "{adj} Running Shoes", "{adj} Leather Shoes"],
    "Bags": ["{adj} Backpack", "{adj} Tote Bag", "{adj} Designer Bag"],
}

ADJECTIVES = [
    "Premium", "Classic", "Essential", "Sport", "Urban", "Elegant",
    "Casual", "Vintage", "Modern", "Lightweight", "Everyday", "Signature",
]

STATUSES = ["active", "inactive", "out-of-stock"]

# Timestamp of the oldest generated product
EPOCH = datetime(2025, 1, 1, tzinfo=timezone.utc)


def slugify(value: str) -> str:
    """Create a URL-safe slug.

    Args:
        value: Text to slugify.

    Returns:
        Lowercase ASCII slug with hyphens.
    """
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode()
    return re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")


# ============================================================================
# Generator Configuration
# ============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for demo catalog generation.

    Attributes:
        seed: Random seed for reproducibility.
        products_per_category: Number of products per category.
        sale_ratio: Share of products with a sale price.
        inactive_ratio: Share of products that are not active.
    """

    seed: int = 42
    products_per_category: int = 5
    sale_ratio: float = 0.3
    inactive_ratio: float = 0.1

    @classmethod
    def small(cls) -> "GeneratorConfig":
        """Create config for small catalog (~30 products)."""
        return cls(seed=42, products_per_category=5)

    @classmethod
    def full(cls) -> "GeneratorConfig":
        """Create config for full catalog (~120 products)."""
        return cls(seed=42, products_per_category=20)


@dataclass
class DemoCatalog:
    """Generated categories and products, ready to store."""

    categories: list[dict[str, Any]] = field(default_factory=list)
    products: list[dict[str, Any]] = field(default_factory=list)


# ============================================================================
# Catalog Generator
# ============================================================================


class CatalogGenerator:
    """Generates the demo catalog with deterministic seeding.

    Example usage:
        generator = CatalogGenerator(GeneratorConfig.small())
        catalog = generator.generate()
        print(len(catalog.products))
    """

    def __init__(self, config: GeneratorConfig) -> None:
        """Initialize generator with configuration.

        Args:
            config: Generator configuration.
        """
        self.config = config

    def _deterministic_seed(self, *args: str | int) -> int:
        """Create deterministic seed from arguments.

        Args:
            args: Values to include in seed.

        Returns:
            Deterministic integer seed.
        """
        data = "|".join(str(a) for a in args)
        hash_bytes = hashlib.md5(data.encode()).digest()
        return int.from_bytes(hash_bytes[:4], "big")

    def _deterministic_id(self, *args: str | int) -> str:
        """Create a deterministic UUID string from arguments."""
        data = "|".join(str(a) for a in (self.config.seed, *args))
        return str(UUID(hashlib.md5(data.encode()).hexdigest()))

    def _generate_category(self, title: str, featured: bool) -> dict[str, Any]:
        """Generate a category document."""
        return {
            "id": self._deterministic_id("category", title),
            "title": title,
            "slug": slugify(title),
            "featured": featured,
            "status": "active",
            "created_at": EPOCH,
            "updated_at": EPOCH,
        }

    def _generate_product(
        self,
        category: dict[str, Any],
        index: int,
        sequence: int,
    ) -> dict[str, Any]:
        """Generate a single product document.

        Args:
            category: Category document the product belongs to.
            index: Product index within its category.
            sequence: Product index across the catalog (drives created_at).

        Returns:
            Product document.
        """
        title = category["title"]
        rng = random.Random(self._deterministic_seed(self.config.seed, title, index))

        brand = rng.choice(BRANDS)
        adj = rng.choice(ADJECTIVES)
        name = f"{brand.capitalize()} {rng.choice(PRODUCT_TEMPLATES[title]).format(adj=adj)}"

        # Round to .99
        min_price, max_price = PRICE_RANGES[title]
        price = (rng.randint(min_price, max_price) // 100) * 100 + 99

        sale_price = None
        if rng.random() < self.config.sale_ratio:
            sale_price = (int(price * rng.uniform(0.6, 0.9)) // 100) * 100 + 99

        status = "active"
        if rng.random() < self.config.inactive_ratio:
            status = rng.choice(STATUSES[1:])

        sizes = [] if title in UNSIZED_CATEGORIES else sorted(
            rng.sample(SIZES, rng.randint(2, len(SIZES))), key=SIZES.index
        )
        colors = sorted(rng.sample(COLORS, rng.randint(1, 2)), key=COLORS.index)

        created_at = EPOCH + timedelta(hours=sequence)
        prefix = slugify(title)[:3].upper()
        slug = f"{slugify(name)}-{prefix.lower()}-{index + 1:02d}"
        product_id = self._deterministic_id("product", title, index)

        return {
            "id": product_id,
            "name": name,
            "slug": slug,
            "description": f"{adj} {title.lower()} piece from {brand.capitalize()}.",
            "price": price,
            "sale_price": sale_price,
            "sku": f"{prefix}-{index + 1:03d}",
            "category": category["id"],
            "images": [
                {
                    "url": f"https://picsum.photos/seed/{product_id[:8]}/600/600",
                    "alt": name,
                }
            ],
            "featured": rng.random() < 0.25,
            "status": status,
            "inventory_quantity": rng.randint(0, 200) if status == "active" else 0,
            "track_quantity": True,
            "sizes": sizes,
            "colors": colors,
            "brand": brand,
            "rating": round(rng.uniform(2.5, 5.0), 1),
            "review_count": rng.randint(0, 500),
            "created_at": created_at,
            "updated_at": created_at,
        }

    def generate_categories(self) -> list[dict[str, Any]]:
        """Generate all category documents."""
        return [self._generate_category(title, featured) for title, featured in CATEGORIES]

    def generate_products(self, categories: list[dict[str, Any]]) -> Iterator[dict[str, Any]]:
        """Generate product documents for the given categories.

        Args:
            categories: Category documents from ``generate_categories``.

        Yields:
            Product documents.
        """
        sequence = 0
        for category in categories:
            for i in range(self.config.products_per_category):
                yield self._generate_product(category, i, sequence)
                sequence += 1

    def generate(self) -> DemoCatalog:
        """Generate the complete demo catalog.

        Returns:
            DemoCatalog with categories and products.
        """
        categories = self.generate_categories()
        return DemoCatalog(
            categories=categories,
            products=list(self.generate_products(categories)),
        )

    @property
    def expected_count(self) -> int:
        """Get expected number of products."""
        return len(CATEGORIES) * self.config.products_per_category
