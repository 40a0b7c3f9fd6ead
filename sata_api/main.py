"""SATA Wellbeing API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SataError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and directory manager initialized on startup via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sata_api.api.error_handlers import register_error_handlers
from sata_api.api.routes import (
    directory_utilization, health, messages, mood, utilization,
)
from sata_api.config import get_settings
from sata_api.infrastructure.database import init_db
from sata_api.infrastructure.observability import setup_logging
from sata_api.services.resources_directory import ResourcesDirectoryManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.directory_manager = ResourcesDirectoryManager()
    logger.info("SATA Wellbeing API started")
    yield
    await manager.dispose()
    logger.info("SATA Wellbeing API shutting down")


settings = get_settings()
app = FastAPI(
    title="SATA Wellbeing API", version=settings.service_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(mood.router)
app.include_router(messages.router)
app.include_router(utilization.router)
app.include_router(directory_utilization.router)

register_error_handlers(app)
