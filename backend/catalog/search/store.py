"""Read-only gateway to the catalog tables.

One ``reader()`` block is one session (one connection checked out from the
pool, one read transaction). The connection goes back to the pool on every
exit path. Any failure to reach or query the database, including timeouts,
surfaces as ``StoreUnavailable`` and never as an empty result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import ColumnElement

from catalog.core.errors import StoreUnavailable
from catalog.models.product import Product
from catalog.search import query_builder
from catalog.search.query_builder import Predicate

logger = logging.getLogger(__name__)

STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


class CatalogReader:
    """Queries bound to a single session."""

    def __init__(self, session: AsyncSession, timeout: float):
        self._session = session
        self._timeout = timeout

    async def _execute(self, statement):
        try:
            return await asyncio.wait_for(self._session.execute(statement), self._timeout)
        except STORE_ERRORS as e:
            logger.error("Catalog query failed: %s", e, exc_info=True)
            raise StoreUnavailable("Catalog store query failed") from e

    async def query_active_products(
        self,
        predicates: list[Predicate],
        order_by: list[ColumnElement],
        limit: int,
        offset: int,
    ) -> list[Product]:
        statement = query_builder.select_products(predicates, order_by, limit, offset)
        result = await self._execute(statement)
        return list(result.scalars().all())

    async def count_active_products(self, predicates: list[Predicate]) -> int:
        result = await self._execute(query_builder.count_products(predicates))
        return result.scalar_one()

    async def group_count(self, predicates: list[Predicate], column: str) -> list[tuple[str, int]]:
        result = await self._execute(query_builder.group_counts(predicates, column))
        return [(value, count) for value, count in result.all()]

    async def get_active_by_sku(self, sku: str) -> Product | None:
        statement = select(Product).where(
            *query_builder.render_where([Predicate("sku", query_builder.EQUALS, sku)])
        )
        result = await self._execute(statement)
        return result.scalar_one_or_none()

    async def ping(self) -> None:
        await self._execute(text("SELECT 1"))


class CatalogStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], timeout: float):
        self._session_factory = session_factory
        self._timeout = timeout

    @asynccontextmanager
    async def reader(self) -> AsyncIterator[CatalogReader]:
        session = self._session_factory()
        try:
            async with session.begin():
                yield CatalogReader(session, self._timeout)
        except STORE_ERRORS as e:
            # begin/commit themselves can fail: pool timeout, dropped connection
            logger.error("Catalog session failed: %s", e, exc_info=True)
            raise StoreUnavailable("Catalog store unavailable") from e
        finally:
            await session.close()
