"""Async Postgres access for ComplyFlow.

One engine per process. Repositories open a unit of work with ``session()``,
and the few operations that live in the database itself (``expire_trials()``,
the pgvector extension) are reached through helpers here.
"""

import re
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

_FUNCTION_NAME = re.compile(r"^[a-z_][a-z0-9_]*$")


class PostgreSQLClient:
    """Engine and unit-of-work factory for the ComplyFlow database.

    Attributes:
        url: asyncpg connection URL
        pool_size: Persistent connections kept open
        max_overflow: Extra connections allowed under load
    """

    def __init__(self, url: str, pool_size: int = 10, max_overflow: int = 10):
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self._engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    async def connect(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_async_engine(
            self.url,
            pool_pre_ping=True,
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
            pool_recycle=3600,
        )
        self._sessions = async_sessionmaker(self._engine, expire_on_commit=False)

    async def disconnect(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessions = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Unit of work: committed on clean exit, rolled back on any error."""
        if self._sessions is None:
            raise RuntimeError("PostgreSQL is not connected")

        async with self._sessions() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            await session.commit()

    async def call_function(self, name: str) -> Any:
        """Invoke a zero-argument SQL function and return its scalar result.

        Raises:
            ValueError: If ``name`` is not a plain SQL identifier
        """
        if not _FUNCTION_NAME.match(name):
            raise ValueError(f"Invalid function name: {name}")
        async with self.session() as session:
            result = await session.execute(text(f"SELECT {name}()"))
            return result.scalar()

    async def vector_enabled(self) -> bool:
        """Whether the pgvector extension is installed in this database."""
        async with self.session() as session:
            result = await session.execute(
                text("SELECT 1 FROM pg_extension WHERE extname = 'vector'")
            )
            return result.scalar() is not None

    async def health_check(self) -> None:
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
