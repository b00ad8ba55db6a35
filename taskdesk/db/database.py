"""
Database Module

Async engine, session factory and the declarative Base shared by all models.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from taskdesk.core.config import settings

logger = logging.getLogger(__name__)


def _engine_options() -> dict:
    options = {"echo": settings.SQLALCHEMY_ECHO, "pool_pre_ping": True}
    if settings.DB_POOL_MIN_SIZE:
        options["pool_size"] = settings.DB_POOL_MIN_SIZE
    if settings.DB_POOL_MAX_SIZE:
        options["max_overflow"] = max(
            settings.DB_POOL_MAX_SIZE - (settings.DB_POOL_MIN_SIZE or 5), 0
        )
    return options


engine = create_async_engine(settings.DATABASE_URL, **_engine_options())

# Objects stay usable after commit; repositories refresh what they need
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    The session is the unit of work handed to services explicitly.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def check_db_connection() -> bool:
    """Run a trivial query to confirm the database is reachable."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
