"""
Lifespan management for MermaidUI application.

Handles FastAPI application startup and shutdown lifecycle:
- Database initialization (fatal on failure)
- Browser diagnostics for the export pipeline
- Resource cleanup on shutdown
"""

import logging
import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config.database import close_db, init_db
from config.settings import config
from services.infrastructure.utils.browser import log_browser_diagnostics

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Handles application initialization and cleanup.
    """
    startup_start = time.time()
    fastapi_app.state.start_time = startup_start
    fastapi_app.state.is_shutting_down = False

    logger.debug("[LIFESPAN] Starting lifespan initialization...")

    # Initialize database (REQUIRED)
    # Application will exit if the store cannot be opened
    try:
        logger.debug("[LIFESPAN] Opening database at %s", config.DATABASE_PATH)
        init_db()
        logger.debug("Database initialized successfully")
    except Exception as e:  # pylint: disable=broad-except
        logger.critical("Failed to initialize database: %s", e, exc_info=True)
        logger.error("Application startup failed. Exiting.")
        os._exit(1)  # pylint: disable=protected-access

    # Verify Playwright installation (for SVG/PNG/PDF export)
    try:
        await log_browser_diagnostics()
    except Exception as e:  # pylint: disable=broad-except
        logger.warning("[LIFESPAN] Browser diagnostics failed: %s", e)

    startup_duration = time.time() - startup_start
    logger.info(
        "MermaidUI v%s ready on port %s (startup %.2fs)",
        config.version, config.port, startup_duration
    )

    # Yield control to application
    try:
        yield
    finally:
        fastapi_app.state.is_shutting_down = True

        # Cleanup Database
        try:
            close_db()
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("Failed to close database: %s", e)
