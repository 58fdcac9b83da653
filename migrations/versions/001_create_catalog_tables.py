"""Create categories and products tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create categories and products tables."""
    # Categories table
    op.create_table(
        'categories',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(200), nullable=False),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)
    op.create_index('ix_categories_status', 'categories', ['status'])

    # Products table
    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('slug', sa.String(500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('sale_price', sa.Integer(), nullable=True),
        sa.Column('sku', sa.String(100), nullable=True),
        sa.Column('category', postgresql.UUID(as_uuid=False),
                  sa.ForeignKey('categories.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('images', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('inventory_quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('track_quantity', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('sizes', postgresql.ARRAY(sa.String(20)), nullable=False, server_default='{}'),
        sa.Column('colors', postgresql.ARRAY(sa.String(50)), nullable=False, server_default='{}'),
        sa.Column('brand', sa.String(100), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('review_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )
    op.create_index('ix_products_slug', 'products', ['slug'], unique=True)
    op.create_index('ix_products_category', 'products', ['category'])
    op.create_index('ix_products_status', 'products', ['status'])
    op.create_index('ix_products_brand', 'products', ['brand'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    # GIN indexes for size/color membership filters
    op.create_index('ix_products_sizes', 'products', ['sizes'], postgresql_using='gin')
    op.create_index('ix_products_colors', 'products', ['colors'], postgresql_using='gin')


def downgrade() -> None:
    """Drop categories and products tables."""
    op.drop_index('ix_products_colors', table_name='products')
    op.drop_index('ix_products_sizes', table_name='products')
    op.drop_index('ix_products_created_at', table_name='products')
    op.drop_index('ix_products_brand', table_name='products')
    op.drop_index('ix_products_status', table_name='products')
    op.drop_index('ix_products_category', table_name='products')
    op.drop_index('ix_products_slug', table_name='products')
    op.drop_table('products')

    op.drop_index('ix_categories_status', table_name='categories')
    op.drop_index('ix_categories_slug', table_name='categories')
    op.drop_table('categories')
