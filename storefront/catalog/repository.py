"""PostgreSQL document store.

Translates document-store where clauses into SQLAlchemy conditions over
the catalog tables, with filtering, sorting, and page-based pagination.
"""

from typing import Any

import structlog
from sqlalchemy import ColumnElement, Select, and_, delete, func, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from storefront.catalog.exceptions import DocumentStoreError
from storefront.catalog.models import COLLECTION_MODELS, Product
from storefront.catalog.store import (
    ARRAY_FIELDS,
    DocumentStore,
    FindResult,
    parse_sort,
    validate_where,
)

logger = structlog.get_logger()


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards in a user-supplied substring."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlDocumentStore(DocumentStore):
    """Document store backed by the catalog tables.

    Opens one session per call, so concurrent finds never share a session.

    Example usage:
        store = SqlDocumentStore(get_session_factory())
        result = await store.find(
            "products",
            where={"status": {"equals": "active"}},
            sort="-created_at",
            limit=9,
            page=2,
            depth=2,
        )
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize store with a session factory.

        Args:
            session_factory: Factory producing async SQLAlchemy sessions.
        """
        self.session_factory = session_factory

    # ------------------------------------------------------------------------
    # Query translation
    # ------------------------------------------------------------------------

    def build_condition(
        self,
        collection: str,
        where: dict[str, Any] | None,
    ) -> ColumnElement[bool]:
        """Translate a where clause into a SQL condition.

        Args:
            collection: Collection being queried.
            where: Validated where clause.

        Returns:
            SQLAlchemy boolean expression (TRUE when empty).
        """
        if not where:
            return true()

        model = COLLECTION_MODELS[collection]
        conditions = []

        for key, condition in where.items():
            if key == "and":
                if not condition:
                    continue
                conditions.append(
                    and_(*(self.build_condition(collection, c) for c in condition))
                )
                continue
            if key == "or":
                if not condition:
                    continue
                conditions.append(
                    or_(*(self.build_condition(collection, c) for c in condition))
                )
                continue

            column = getattr(model, key)
            is_array = key in ARRAY_FIELDS[collection]

            for operator, value in condition.items():
                if operator == "equals":
                    conditions.append(column.is_(None) if value is None else column == value)
                elif operator == "not_equals":
                    conditions.append(
                        column.is_not(None) if value is None else column != value
                    )
                elif operator == "contains":
                    if is_array:
                        conditions.append(column.contains([value]))
                    else:
                        pattern = f"%{_escape_like(str(value))}%"
                        conditions.append(column.ilike(pattern, escape="\\"))
                elif operator == "greater_than_equal":
                    conditions.append(column >= value)
                elif operator == "exists":
                    conditions.append(column.is_not(None) if value else column.is_(None))

        return and_(*conditions) if conditions else true()

    def build_select(
        self,
        collection: str,
        where: dict[str, Any] | None = None,
        sort: str | None = None,
        limit: int = 10,
        page: int = 1,
        depth: int = 0,
    ) -> tuple[Select, Select]:
        """Build the page query and the matching count query.

        Args:
            collection: Collection to query.
            where: Where clause.
            sort: Sort field, "-" prefixed for descending.
            limit: Page size; 0 or less disables pagination.
            page: 1-based page number.
            depth: Relationship depth to populate.

        Returns:
            Tuple of (page query, count query).

        Raises:
            InvalidQueryError: On unknown collection, field or operator.
        """
        validate_where(collection, where)
        ordering = parse_sort(collection, sort)
        model = COLLECTION_MODELS[collection]
        condition = self.build_condition(collection, where)

        query = select(model).where(condition)
        count_query = select(func.count()).select_from(model).where(condition)

        if ordering is not None:
            field_name, descending = ordering
            column = getattr(model, field_name)
            order = column.desc() if descending else column.asc()
            query = query.order_by(order.nulls_last(), model.id)

        if limit > 0:
            query = query.limit(limit).offset((max(page, 1) - 1) * limit)

        if depth >= 1 and model is Product:
            query = query.options(selectinload(Product.category_ref))

        return query, count_query

    # ------------------------------------------------------------------------
    # Document store operations
    # ------------------------------------------------------------------------

    async def find(
        self,
        collection: str,
        where: dict[str, Any] | None = None,
        sort: str | None = None,
        limit: int = 10,
        page: int = 1,
        depth: int = 0,
    ) -> FindResult:
        """Find documents matching a where clause."""
        query, count_query = self.build_select(collection, where, sort, limit, page, depth)

        try:
            async with self.session_factory() as session:
                total = (await session.execute(count_query)).scalar_one()
                rows = (await session.execute(query)).scalars().all()
                docs = [row.to_dict(depth) for row in rows]
        except (SQLAlchemyError, OSError) as e:
            logger.error("Document query failed", collection=collection, error=str(e))
            raise DocumentStoreError(collection, str(e)) from e

        return FindResult.build(docs=docs, total_docs=total, page=max(page, 1), limit=limit)

    async def create(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create a document."""
        validate_where(collection, None)
        model = COLLECTION_MODELS[collection]

        try:
            async with self.session_factory() as session:
                row = model(**data)
                session.add(row)
                await session.commit()
                await session.refresh(row)
                return row.to_dict()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Document create failed", collection=collection, error=str(e))
            raise DocumentStoreError(collection, str(e)) from e

    async def delete(self, collection: str, where: dict[str, Any] | None = None) -> int:
        """Delete documents matching a where clause."""
        validate_where(collection, where)
        model = COLLECTION_MODELS[collection]
        statement = delete(model).where(self.build_condition(collection, where))

        try:
            async with self.session_factory() as session:
                result = await session.execute(statement)
                await session.commit()
                return result.rowcount
        except (SQLAlchemyError, OSError) as e:
            logger.error("Document delete failed", collection=collection, error=str(e))
            raise DocumentStoreError(collection, str(e)) from e
