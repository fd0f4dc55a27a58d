"""
Database engine and session handling.

CONNECTION STRATEGY: lazy, single-flight
========================================

The engine is not created at import time. The first request that needs the
database calls ``Database.connect()``, which starts exactly one connection
attempt (create engine, run ``SELECT 1``). Requests that arrive while that
attempt is in flight await the same task instead of opening their own
engine. Once connected, the sessionmaker is cached and returned directly.

If the attempt fails or times out, every waiter receives
StoreUnavailableError, the engine is disposed and the in-flight task is
cleared so that the next request retries from scratch.
"""

import asyncio
from typing import AsyncGenerator, Any, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from evently.core.config import get_settings
from evently.core.errors import StoreUnavailableError
from evently.core.logging import get_logger
from evently.core.metrics import record_db_connection

logger = get_logger(__name__)
settings = get_settings()


class Database:
    """Shared, lazily-initialised handle to the database engine."""

    def __init__(self, url: str, connect_timeout: float = 10.0, **engine_options: Any) -> None:
        self.url = url
        self.connect_timeout = connect_timeout
        self._engine_options = engine_options
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None
        self._connecting: Optional[asyncio.Task] = None

    @property
    def connected(self) -> bool:
        return self._sessionmaker is not None

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    async def connect(self) -> async_sessionmaker[AsyncSession]:
        """Return the sessionmaker, establishing the connection if needed."""
        if self._sessionmaker is not None:
            return self._sessionmaker

        if self._connecting is None:
            self._connecting = asyncio.ensure_future(self._establish())

        # shield: one cancelled caller must not cancel the attempt for the others
        return await asyncio.shield(self._connecting)

    async def _establish(self) -> async_sessionmaker[AsyncSession]:
        engine: Optional[AsyncEngine] = None
        try:
            engine = create_async_engine(self.url, **self._engine_options)
            await asyncio.wait_for(self._ping(engine), timeout=self.connect_timeout)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            if engine is not None:
                await engine.dispose()
            self._connecting = None
            record_db_connection(success=False)
            logger.error("database_connection_failed", error=str(e) or type(e).__name__)
            raise StoreUnavailableError() from e

        self._engine = engine
        self._sessionmaker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        self._connecting = None
        record_db_connection(success=True)
        logger.info("database_connected", dialect=engine.dialect.name)
        return self._sessionmaker

    @staticmethod
    async def _ping(engine: AsyncEngine) -> None:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self) -> None:
        """Create tables directly from the models (local runs and tests)."""
        from evently.db.base import Base
        import evently.models  # noqa: F401 - register tables on the metadata

        await self.connect()
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Health probe; never raises."""
        try:
            await self.connect()
            await self._ping(self._engine)
        except (StoreUnavailableError, SQLAlchemyError, OSError):
            return False
        return True

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        self._connecting = None


def _engine_options() -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if not settings.DATABASE_URL.startswith("sqlite"):
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    return options


database = Database(
    settings.DATABASE_URL,
    connect_timeout=settings.DB_CONNECT_TIMEOUT,
    **_engine_options(),
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: one session per request.
    Commits when the handler returns, rolls back on any exception.
    """
    session_factory = await database.connect()
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
