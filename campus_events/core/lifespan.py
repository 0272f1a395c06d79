"""Application lifespan: startup and shutdown.

Wiring of infrastructure only: logging, image store, DB engine dispose.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from campus_events.core.config import get_settings
from campus_events.infrastructure.external.storage import ImageStoreFactory
from campus_events.infrastructure.persistence import database
from campus_events.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging and the image store, yield, then dispose the SQL engine."""
    settings = get_settings()
    setup_logging()

    if getattr(app.state, "image_store", None) is None:
        app.state.image_store = ImageStoreFactory.create_image_store(settings)
    logger.info(
        "%s %s started (storage=%s, report_threshold=%d)",
        settings.app_name,
        settings.app_version,
        settings.storage_backend,
        settings.report_threshold,
    )

    yield

    await database.dispose_engine()
    logger.info("Database engine disposed")
