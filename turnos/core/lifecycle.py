"""
Application lifecycle management using the FastAPI lifespan pattern.

Handles startup configuration checks and graceful shutdown of HTTP clients
and the database pool.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from turnos.config.settings import Settings, get_settings
from turnos.core.container import get_container

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Handles startup initialization and graceful shutdown.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._initialized = False

    async def startup(self) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")
        self._verify_configurations()
        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        await get_container().aclose()

        from turnos.database.async_db import dispose_engine

        await dispose_engine()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        """Warn about missing integration credentials."""
        settings = self._settings
        if not settings.MERCADO_PAGO_ACCESS_TOKEN:
            logger.warning("MERCADO_PAGO_ACCESS_TOKEN not configured - payment preferences will fail")
        if not settings.MERCADO_PAGO_NOTIFICATION_URL:
            logger.warning("MERCADO_PAGO_NOTIFICATION_URL not configured - relying on account-level webhook")
        if not (settings.GOOGLE_CLIENT_ID and settings.GOOGLE_CLIENT_SECRET and settings.GOOGLE_REFRESH_TOKEN):
            logger.warning("Google Calendar credentials not configured - reservations will fail")
        if settings.JWT_SECRET_KEY == "change-me" and not settings.is_development:
            logger.error("JWT_SECRET_KEY uses the default value in a non-development environment")


# Global lifecycle manager instance
_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    """Get or create the global lifecycle manager instance."""
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = get_lifecycle_manager()

    await lifecycle.startup()

    yield  # Application runs here

    await lifecycle.shutdown()
