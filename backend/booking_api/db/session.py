"""
Database connection as an explicitly owned resource.

The lifespan in main.py builds one `Database` from settings, stores it on
`app.state.db` and disposes it on shutdown. Routes receive a per-request
session through the `get_db` dependency, which commits on success and rolls
back on error.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from booking_api.core.config import Settings
from booking_api.core.logging import get_logger
from booking_api.db.base import Base

logger = get_logger(__name__)


class Database:
    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self._engine_kwargs = engine_kwargs
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        kwargs = {"pool_pre_ping": True, "echo": settings.DEBUG}
        # SQLite drivers do not take pool sizing arguments
        if not settings.DATABASE_URL.startswith("sqlite"):
            kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT,
                pool_recycle=settings.DB_POOL_RECYCLE,
            )
        return cls(settings.DATABASE_URL, **kwargs)

    def connect(self) -> None:
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, **self._engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info("database_engine_created", dialect=self.engine.dialect.name)

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        if self.engine is None:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.exec_driver_sql("SELECT 1")
            return True
        except Exception as e:
            logger.warning("database_ping_failed", error=str(e))
            return False

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("database_engine_disposed")
        self.engine = None
        self.session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
