"""Tests for the catalog Alembic migration."""

import importlib
import inspect
import types

import pytest

from storefront.catalog.models import Category, Product
from storefront.infrastructure.database import Base


@pytest.fixture
def migration() -> types.ModuleType:
    """Import the catalog migration module."""
    return importlib.import_module("migrations.versions.001_create_catalog_tables")


class TestMigrationStructure:
    """Verify migration metadata and functions."""

    def test_revision_id(self, migration: types.ModuleType) -> None:
        """Migration has correct revision ID."""
        assert migration.revision == "001"

    def test_down_revision_is_none(self, migration: types.ModuleType) -> None:
        """Initial migration has no parent."""
        assert migration.down_revision is None

    def test_upgrade_and_downgrade_callable(self, migration: types.ModuleType) -> None:
        """upgrade() and downgrade() exist and are callable."""
        assert callable(migration.upgrade)
        assert callable(migration.downgrade)


class TestMigrationCompleteness:
    """Verify migration covers the catalog models."""

    def test_all_tables_represented(self, migration: types.ModuleType) -> None:
        """Every model table is created by the migration."""
        source = inspect.getsource(migration.upgrade)
        for table_name in Base.metadata.tables:
            assert f"'{table_name}'" in source

    def test_all_columns_represented(self, migration: types.ModuleType) -> None:
        """Every model column is created by the migration."""
        source = inspect.getsource(migration.upgrade)
        for model in (Category, Product):
            for column in model.__table__.columns:
                assert f"sa.Column('{column.name}'" in source, (
                    f"{model.__tablename__}.{column.name} missing from migration"
                )

    def test_expected_table_names(self) -> None:
        """Only the catalog tables are registered."""
        assert set(Base.metadata.tables) == {"categories", "products"}

    def test_downgrade_drops_tables(self, migration: types.ModuleType) -> None:
        """downgrade() drops both tables."""
        source = inspect.getsource(migration.downgrade)
        assert "op.drop_table('products')" in source
        assert "op.drop_table('categories')" in source
