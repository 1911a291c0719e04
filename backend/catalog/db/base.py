"""Declarative base and the connection pool owned by the application."""

from __future__ import annotations

import logging

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from catalog.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


def connect_args_for(settings: Settings) -> dict:
    """asyncpg connection options bounding connect time and every statement."""
    statement_timeout_ms = int(settings.DB_STATEMENT_TIMEOUT_SECONDS * 1000)
    return {
        "timeout": settings.DB_CONNECT_TIMEOUT_SECONDS,
        "command_timeout": settings.DB_STATEMENT_TIMEOUT_SECONDS,
        "server_settings": {"statement_timeout": str(statement_timeout_ms)},
    }


class Database:
    """Engine + session factory pair, created once per process.

    The pool is bounded by ``DB_POOL_SIZE`` with no overflow, so at most that
    many store operations are in flight at any time.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = create_async_engine(
            settings.DATABASE_URL,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=0,
            pool_timeout=settings.DB_POOL_TIMEOUT_SECONDS,
            pool_recycle=settings.DB_POOL_RECYCLE_SECONDS,
            pool_pre_ping=True,
            connect_args=connect_args_for(settings),
        )
        logger.info("Database pool created (size=%s)", settings.DB_POOL_SIZE)
        return cls(engine)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database pool closed")


def get_database(request: Request) -> Database:
    return request.app.state.database

