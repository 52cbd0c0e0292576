"""ChronoSync database layer - async SQLAlchemy engine and sessions.

Production runs on PostgreSQL (asyncpg); local development and the test
suite use SQLite through aiosqlite.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from chronosync.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> dict[str, Any]:
    """Keyword arguments for create_async_engine.

    DB_POOL_* settings apply only to server databases; SQLite keeps its
    own pool.
    """
    options: dict[str, Any] = {
        "echo": settings.debug and settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=True,
        )
    return options


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """Turn on FK enforcement for every SQLite connection.

    SQLite ignores ON DELETE CASCADE unless the pragma is set, and
    session rows must go away with their user.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(settings.database_url, **_engine_options())
if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session: committed when the endpoint returns, rolled back if it raises."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except BaseException:
            # Includes asyncio.CancelledError from dropped connections
            await session.rollback()
            raise


async def check_db_connection() -> bool:
    """True if a trivial query succeeds."""
    try:
        async with async_session_maker() as session:
            await session.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError) as e:
        logger.warning(f"Database connection check failed: {e}")
        return False
    return True
