"""Async database connection management.

Provides SQLAlchemy async engine and session factory. PostgreSQL (asyncpg)
in production, SQLite (aiosqlite) for local runs and tests.
"""

import logging
from collections.abc import AsyncGenerator
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """created_at / updated_at columns shared by every table."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )


# Module-level engine and session factory
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_db(database_url: str, **engine_kwargs: Any) -> None:
    """Initialize database engine and session factory.

    Args:
        database_url: Async connection URL (postgresql+asyncpg://... or sqlite+aiosqlite://...)
        **engine_kwargs: Additional arguments passed to create_async_engine
    """
    global _engine, _session_factory

    # Set defaults for engine kwargs
    engine_kwargs.setdefault("echo", False)
    engine_kwargs.setdefault("pool_pre_ping", True)

    _engine = create_async_engine(database_url, **engine_kwargs)
    if _engine.dialect.name == "sqlite":
        # ON DELETE CASCADE / SET NULL are ignored by SQLite unless enabled per connection
        event.listen(_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    """Get the database engine.

    Returns:
        The async database engine.

    Raises:
        RuntimeError: If database not initialized.
    """
    if _engine is None:
        raise RuntimeError("Database not initialized. Call init_db first.")
    return _engine


async def create_all() -> None:
    """Create any missing tables from the model metadata."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI - yields async session.

    Yields:
        AsyncSession for database operations.

    Raises:
        RuntimeError: If database not initialized.
    """
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call init_db first.")
    async with _session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def close_db() -> None:
    """Close database connections.

    Should be called during application shutdown.
    """
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
