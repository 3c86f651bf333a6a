"""Database engine, pool, and the query gateway handed to every request.

The engine (and its connection pool) is created once in the application
lifespan and wrapped in a ``Database``. Handlers receive it through the
``DatabaseDep`` dependency instead of importing a module-level global.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Annotated, Any

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from core.config import Settings, get_settings
from core.logger import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


class Database:
    """Thin async gateway issuing parameterized SQL against the shared pool.

    Reads use a plain connection; writes run inside ``engine.begin()`` so
    each statement commits on its own.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def fetch_all(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        async with self._engine.connect() as conn:
            result = await conn.execute(text(query), dict(params or {}))
            rows = result.mappings().all()
        return [dict(row) for row in rows]

    async def fetch_one(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        async with self._engine.connect() as conn:
            result = await conn.execute(text(query), dict(params or {}))
            row = result.mappings().first()
        return dict(row) if row is not None else None

    async def execute(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> int:
        """Run a write statement and return the number of affected rows."""
        async with self._engine.begin() as conn:
            result = await conn.execute(text(query), dict(params or {}))
            return result.rowcount

    async def execute_returning(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Run a write statement with a RETURNING clause and return the first row."""
        async with self._engine.begin() as conn:
            result = await conn.execute(text(query), dict(params or {}))
            row = result.mappings().first()
        return dict(row) if row is not None else None

    async def ping(self) -> None:
        """Verify database is reachable (30s timeout)."""
        async with asyncio.timeout(30):
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        await self._engine.dispose()
        logger.info("db.engine.disposed")


def create_engine(settings: Settings | None = None) -> AsyncEngine:
    settings = settings or get_settings()
    return create_async_engine(
        settings.database_url,
        echo=settings.db_echo,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_pool_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
        pool_pre_ping=True,
    )


async def init_db(database: Database) -> None:
    """Verify database is reachable. Schema is created via ``cli.py create-tables``."""
    logger.info("db.connectivity.verifying")
    await database.ping()
    logger.info("db.connectivity.verified")


def get_database(request: Request) -> Database:
    """Return the process-wide gateway stored on app state by the lifespan."""
    return request.app.state.database


DatabaseDep = Annotated[Database, Depends(get_database)]
