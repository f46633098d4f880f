"""Application lifecycle management.

This module handles application startup and shutdown events, ensuring proper
initialization and cleanup of application resources.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config.settings import settings
from src.core.logging import logger
from src.infrastructure.database import (
    check_database_health,
    create_async_db_and_tables,
    dispose_engine,
)


def create_lifespan_manager():
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create tables on startup and release pooled connections on shutdown.

        Args:
            app (FastAPI): The FastAPI application instance

        Raises:
            OperationalError: If the database stays unreachable during startup
        """
        await create_async_db_and_tables()
        if not await check_database_health():
            logger.warning("database_unhealthy_on_startup")
        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        await dispose_engine()
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
