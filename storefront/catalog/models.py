"""SQLAlchemy models for the product catalog.

Defines the categories and products tables backing the PostgreSQL
document store. Field names match the document field names used in
where clauses.
"""

from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.database import Base


class Category(Base):
    """Product category.

    Attributes:
        id: Unique category identifier (UUID).
        title: Display title.
        slug: URL-safe unique identifier.
        featured: Whether the category is shown on the home page.
        status: "active" or "inactive".
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active", index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    products: Mapped[list["Product"]] = relationship("Product", back_populates="category_ref")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, slug={self.slug})>"

    def to_dict(self, depth: int = 0) -> dict[str, Any]:
        """Convert to document dictionary.

        Args:
            depth: Unused; categories have no relationships.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "featured": self.featured,
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class Product(Base):
    """Product in the storefront catalog.

    Attributes:
        id: Unique product identifier (UUID).
        name: Product name.
        slug: URL-safe unique identifier.
        description: Plain-text description.
        price: Regular price in minor currency units.
        sale_price: Sale price in minor currency units, if on sale.
        sku: Stock Keeping Unit.
        category: Category ID.
        images: List of ``{"url", "alt"}`` objects.
        featured: Whether the product is shown on the home page.
        status: "active", "inactive" or "out-of-stock".
        inventory_quantity: Units in stock.
        track_quantity: Whether inventory is tracked.
        sizes: Offered sizes (lowercase codes).
        colors: Offered colors (lowercase names).
        brand: Brand (lowercase).
        rating: Average rating (0.0-5.0).
        review_count: Number of reviews.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(500), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    sale_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sku: Mapped[str | None] = mapped_column(String(100), nullable=True)
    category: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    images: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active", index=True)
    inventory_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    track_quantity: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sizes: Mapped[list[str]] = mapped_column(ARRAY(String(20)), nullable=False, default=list)
    colors: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False, default=list)
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    category_ref: Mapped[Category] = relationship("Category", back_populates="products")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug})>"

    def to_dict(self, depth: int = 0) -> dict[str, Any]:
        """Convert to document dictionary.

        Args:
            depth: Embed the category document when 1 or more; the
                category must then be loaded.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "price": self.price,
            "sale_price": self.sale_price,
            "sku": self.sku,
            "category": self.category_ref.to_dict() if depth >= 1 else self.category,
            "images": list(self.images or []),
            "featured": self.featured,
            "status": self.status,
            "inventory_quantity": self.inventory_quantity,
            "track_quantity": self.track_quantity,
            "sizes": list(self.sizes or []),
            "colors": list(self.colors or []),
            "brand": self.brand,
            "rating": self.rating,
            "review_count": self.review_count,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


# Collection name -> model
COLLECTION_MODELS: dict[str, type[Base]] = {
    "products": Product,
    "categories": Category,
}
