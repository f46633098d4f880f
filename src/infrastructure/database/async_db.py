from __future__ import annotations

"""
Asynchronous Database Utilities Module

This module provides the asynchronous SQLAlchemy engine and session helpers
used by the repositories. The engine is built on first use, so importing the
application (for example in test suites that override the repositories) never
requires a database driver connection.

**Security Note**: DATABASE_URL typically embeds credentials. It is never
logged. Use SSL parameters in the URL when connecting over untrusted networks.

Key Components:
    - get_engine: Lazily created asynchronous engine.
    - get_session_factory: Factory for asynchronous sessions.
    - get_async_db: FastAPI dependency yielding a session per request.
    - check_database_health: Startup connectivity check.
    - create_async_db_and_tables: Creates the tables of all SQLModel entities (tenacity retries).
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from structlog import get_logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from src.core.config.settings import settings

# Entity modules must be imported so their tables are registered on the metadata.
from src.domain.entities.user import User  # noqa: F401
from src.domain.entities.verification_token import VerificationToken  # noqa: F401

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Create the process-wide asynchronous engine on first call."""
    engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        pool_pre_ping=True,
    )
    logger.info("Async database engine created", dialect=engine.dialect.name)
    return engine


@lru_cache(maxsize=1)
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=get_engine(), class_=AsyncSession, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:  # noqa: D401
    """
    FastAPI dependency that yields an AsyncSession.

    It automatically rolls back the transaction if an exception occurs and
    ensures proper session closure.

    Yields:
        AsyncSession: An asynchronous database session for use in FastAPI routes.
    """
    async with get_session_factory()() as session:  # pragma: no cover – boilerplate
        logger.debug("Async database session created")
        try:
            yield session
        except Exception:  # noqa: BLE001 – Any DB error must trigger rollback
            await session.rollback()
            logger.error("Async database session rollback due to error")
            raise
        finally:
            await session.close()
            logger.debug("Async database session closed")


async def check_database_health() -> bool:
    """
    Performs a health check on the database connection.

    Returns:
        bool: True if a trivial query succeeds, False otherwise
    """
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (OperationalError, OSError) as e:
        logger.error("database_health_check_failed", error=str(e))
        return False


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=4, max=10),
    retry=retry_if_exception_type((OperationalError, OSError)),
    reraise=True,
)
async def create_async_db_and_tables() -> None:  # noqa: D401
    """
    Create tables using the async engine, retrying while the database starts.

    Called on application startup; existing tables are left untouched.

    Raises:
        OperationalError: If the database stays unreachable after all retries
    """
    logger.info("Creating async database tables")
    try:
        async with get_engine().begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    except (OperationalError, OSError) as e:
        logger.warning("database_tables_creation_retry", error=str(e))
        raise
    logger.info("Async database tables created")


async def dispose_engine() -> None:
    """Close pooled connections on shutdown if the engine was ever created."""
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
        logger.info("Async database engine disposed")
