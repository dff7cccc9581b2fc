"""Wildwatch API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to the {error, details} envelope
    - CORS configured from settings (not hardcoded)
    - Every request produces one access log line
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - OpenAPI JSON served at /doc and Swagger UI at /ui
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wildwatch.api.error_handlers import register_error_handlers
from wildwatch.api.routes import (
    devices, events, field_observations, health, images, my, projects, submissions,
)
from wildwatch.config import get_settings
from wildwatch.infrastructure import database
from wildwatch.infrastructure.observability import log_requests, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Wildwatch API started")
    yield
    if database.db_manager is not None:
        await database.db_manager.dispose()
    logger.info("Wildwatch API shutting down")


app = FastAPI(
    title="Wildwatch API",
    version="1.0.0",
    lifespan=lifespan,
    openapi_url="/doc",
    docs_url="/ui",
    redoc_url=None,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

app.include_router(health.router)
app.include_router(devices.router)
app.include_router(my.router)
app.include_router(events.router)
app.include_router(projects.router)
app.include_router(submissions.router)
app.include_router(field_observations.router)
app.include_router(images.router)

register_error_handlers(app)
