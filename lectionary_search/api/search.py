"""
Search Endpoint

GET  /v1/search?q=...  - Search as the user types (debounced client side)
POST /v1/search        - Explicit submit

Both run the same pipeline: classify query -> match readings -> format.

Patterns Applied:
- FastAPI router pattern
- Pydantic request/response models
- Dependency injection for the reading store and settings
"""

from __future__ import annotations

import time
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from lectionary_search.api.dependencies import get_app_settings, get_reading_store
from lectionary_search.core.config import Settings
from lectionary_search.core.logging import get_logger
from lectionary_search.core.tracing import get_tracer
from lectionary_search.readings.dates import DateEncoding, format_reading_date
from lectionary_search.readings.loader import ReadingStore
from lectionary_search.search.matcher import SearchOutcome, search

logger = get_logger(__name__)
tracer = get_tracer(__name__)

# =============================================================================
# Constants
# =============================================================================

API_PREFIX = "/v1"
SEARCH_TAG = "search"
DESC_QUERY = "Verse reference ('Genesis 1:1'), phrase, or comma-separated terms"


# =============================================================================
# Request/Response Models
# =============================================================================


class SearchRequest(BaseModel):
    """Request body for search endpoint.

    An empty query is valid and yields status "no_query".
    """

    query: str = Field(
        default="",
        description=DESC_QUERY,
        examples=["mountain", "Exodus 3:1", "salvation, throne"],
    )


class ReadingItem(BaseModel):
    """A matching reading."""

    text: str
    date: str
    display_date: str
    source: str


class SearchResponse(BaseModel):
    """Response from search endpoint."""

    query: str
    mode: str = Field(description="empty, verse_reference, terms, or phrase")
    status: str = Field(description="no_query, no_matches, or matched")
    total_results: int = 0
    results: list[ReadingItem] = Field(default_factory=list)
    processing_time_ms: float
    notice: str | None = Field(
        default=None, description="Set when the reading collection failed to load"
    )


# =============================================================================
# Router
# =============================================================================

search_router = APIRouter(prefix=API_PREFIX, tags=[SEARCH_TAG])


def _to_response(
    outcome: SearchOutcome,
    encoding: DateEncoding,
    elapsed_ms: float,
    notice: str | None,
) -> SearchResponse:
    return SearchResponse(
        query=outcome.query,
        mode=outcome.mode.value,
        status=outcome.status.value,
        total_results=len(outcome),
        results=[
            ReadingItem(
                text=r.text,
                date=r.date,
                display_date=format_reading_date(r.date, encoding),
                source=r.source,
            )
            for r in outcome.results
        ],
        processing_time_ms=elapsed_ms,
        notice=notice,
    )


def run_search(query: str, store: ReadingStore, settings: Settings) -> SearchResponse:
    """Execute one search against the store and format the response."""
    start_time = time.perf_counter()

    with tracer.start_as_current_span("search") as span:
        outcome = search(query, store.readings)
        span.set_attribute("search.mode", outcome.mode.value)
        span.set_attribute("search.results", len(outcome))

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    logger.info(
        "search_completed",
        mode=outcome.mode.value,
        status=outcome.status.value,
        results=len(outcome),
        processing_time_ms=round(elapsed_ms, 3),
    )

    return _to_response(
        outcome,
        DateEncoding(settings.date_encoding),
        elapsed_ms,
        store.notice,
    )


@search_router.get("/search", response_model=SearchResponse)
async def search_get(
    store: Annotated[ReadingStore, Depends(get_reading_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    q: Annotated[str, Query(description=DESC_QUERY)] = "",
) -> SearchResponse:
    """Search readings with the query string parameter q."""
    return run_search(q, store, settings)


@search_router.post("/search", response_model=SearchResponse)
async def search_post(
    request: SearchRequest,
    store: Annotated[ReadingStore, Depends(get_reading_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SearchResponse:
    """Search readings with a JSON body."""
    return run_search(request.query, store, settings)
