"""
Database module for the user-preferences service.

Owns the process-wide async SQLAlchemy engine (and its connection pool)
plus the session factory handed out per request.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings, get_settings
from core.exceptions import StorageError

logger = logging.getLogger(__name__)

# Global engine and session factory
_engine: AsyncEngine | None = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


async def init_database(settings: Settings | None = None) -> None:
    """
    Create the engine and session factory.

    Called once from the application lifespan. Does nothing when the
    database is disabled or has no URL.
    """
    global _engine, _async_session_factory

    settings = settings or get_settings()

    if not settings.is_database_configured:
        logger.warning("Database is not configured, skipping initialization")
        return

    logger.info("Initializing database connection pool...")

    _engine = create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug and settings.db_echo,
    )

    _async_session_factory = async_sessionmaker(
        bind=_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    logger.info("Database initialized successfully")


async def close_database() -> None:
    """Dispose of the engine; called at shutdown."""
    global _engine, _async_session_factory

    if _engine is not None:
        logger.info("Closing database connection pool...")
        await _engine.dispose()
        _engine = None
        _async_session_factory = None
        logger.info("Database connection pool closed")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session scoped to one request.

    Used directly as a FastAPI dependency, so an error raised by the
    endpoint is thrown in here: commits when the caller finishes cleanly,
    rolls back and re-raises otherwise.
    """
    if _async_session_factory is None:
        raise StorageError(message="database is not initialized")

    async with _async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def is_database_available() -> bool:
    """Check if database is available and initialized."""
    return _engine is not None and _async_session_factory is not None


__all__ = [
    "init_database",
    "close_database",
    "get_session",
    "is_database_available",
]
