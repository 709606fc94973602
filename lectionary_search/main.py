"""
Lectionary Search - Main Application Entry Point

- FastAPI app with lifespan handler
- uvicorn lectionary_search.main:app starts the service

Patterns Applied:
- Lifespan context manager
- One-time configure_logging() at startup
- Reading collection loaded once at startup and never mutated

Anti-Patterns Avoided:
- Deprecated @app.on_event - using modern lifespan pattern
- structlog.configure() per request - one-time at startup
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lectionary_search.api.health import router as health_router
from lectionary_search.api.readings import readings_router
from lectionary_search.api.search import search_router
from lectionary_search.core.config import get_settings
from lectionary_search.core.logging import configure_logging, get_logger
from lectionary_search.core.tracing import configure_tracing
from lectionary_search.readings.loader import (
    HttpReadingSource,
    ReadingStore,
    source_from_location,
)

settings = get_settings()

configure_logging(
    log_level=settings.log_level,
    json_output=settings.log_json,
)

logger = get_logger(__name__)


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager for startup/shutdown events.

    Loads the reading collection once. A failed load is logged and leaves
    the store FAILED; the service still starts and /ready reports 503.
    """
    # =========================================================================
    # STARTUP
    # =========================================================================
    logger.info(
        "startup",
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
    )

    if settings.tracing_enabled:
        configure_tracing(
            service_name=settings.service_name,
            console_export=settings.tracing_console_export,
        )
        logger.info("tracing_configured")

    store = ReadingStore()
    app.state.settings = settings
    app.state.reading_store = store

    source = source_from_location(
        settings.readings_location,
        timeout=settings.http_timeout,
        max_retries=settings.http_max_retries,
    )
    try:
        await store.load(source)
    finally:
        if isinstance(source, HttpReadingSource):
            await source.close()

    yield

    # =========================================================================
    # SHUTDOWN
    # =========================================================================
    logger.info("shutdown", service=settings.service_name)


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="Lectionary-Search",
    description="Verse-reference and keyword search over dated lectionary readings",
    version=settings.version,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(search_router)
app.include_router(readings_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint pointing at the docs."""
    return {
        "service": settings.service_name,
        "version": settings.version,
        "docs": "/docs",
    }
