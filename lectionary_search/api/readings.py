"""
Reading Diagnostics Endpoint

GET /v1/readings/diagnostics - Load state and records dropped by validation.
Operator-facing; discard reasons are never shown in search responses.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from lectionary_search.api.dependencies import get_reading_store
from lectionary_search.readings.loader import ReadingStore

readings_router = APIRouter(prefix="/v1/readings", tags=["readings"])


class DiscardedRecordItem(BaseModel):
    index: int
    reason: str


class DiagnosticsResponse(BaseModel):
    """Collection load diagnostics."""

    state: str = Field(description="pending, ready, or failed")
    location: str | None = None
    admitted: int
    discarded: list[DiscardedRecordItem] = Field(default_factory=list)
    discard_counts: dict[str, int] = Field(default_factory=dict)
    error: str | None = None


@readings_router.get("/diagnostics", response_model=DiagnosticsResponse)
async def diagnostics(
    store: Annotated[ReadingStore, Depends(get_reading_store)],
) -> DiagnosticsResponse:
    report = store.report
    return DiagnosticsResponse(
        state=store.state.value,
        location=store.location,
        admitted=len(report.readings),
        discarded=[
            DiscardedRecordItem(index=d.index, reason=d.reason)
            for d in report.discarded
        ],
        discard_counts=report.discard_counts(),
        error=store.error,
    )
