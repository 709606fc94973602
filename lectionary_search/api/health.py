"""
Lectionary Search - Health API Routes

GET /health: liveness, always 200
GET /ready: readiness, 503 until the reading collection has loaded

Patterns Applied:
- Health Check Pattern with a HealthService class
- Pydantic response models

Anti-Patterns Avoided:
- Bare except clauses
- Missing response models
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from lectionary_search import __version__
from lectionary_search.api.dependencies import get_reading_store
from lectionary_search.core.logging import SERVICE_NAME, get_logger
from lectionary_search.readings.loader import LoadState, ReadingStore

router = APIRouter(tags=["health"])

logger = get_logger(__name__)


# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    version: str
    service: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""
    status: str
    checks: dict[str, bool]
    readings: int


# =============================================================================
# Health Service
# =============================================================================


class HealthService:
    """Service class for health check operations."""

    def __init__(self, version: str = __version__):
        """Initialize health service.

        Args:
            version: Service version string
        """
        self._version = version

    def check_health(self) -> dict[str, Any]:
        """Check basic service health.

        Returns:
            Health status dictionary with status, version, service
        """
        return {
            "status": "healthy",
            "version": self._version,
            "service": SERVICE_NAME,
        }

    def check_readiness(self, store: ReadingStore) -> tuple[dict[str, Any], bool]:
        """Check if the reading collection is available.

        Args:
            store: The application's reading store

        Returns:
            Tuple of (readiness dict, is_ready bool)
        """
        checks = {
            "readings_loaded": store.state is LoadState.READY,
            "load_failed": store.state is LoadState.FAILED,
        }

        is_ready = checks["readings_loaded"]
        if is_ready:
            state = "ready"
        elif checks["load_failed"]:
            state = "failed"
        else:
            state = "not_ready"

        result: dict[str, Any] = {
            "status": state,
            "checks": checks,
            "readings": len(store.readings),
        }

        return result, is_ready


_health_service = HealthService()


def get_health_service() -> HealthService:
    """Get health service instance."""
    return _health_service


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Basic health check endpoint for liveness probe",
)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    service = get_health_service()
    data = service.check_health()
    logger.debug("health_check", status=data["status"])
    return HealthResponse(**data)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={
        200: {"description": "Readings loaded"},
        503: {"description": "Readings pending or failed to load"},
    },
    summary="Readiness Check",
    description="Readiness check endpoint for readiness probe",
)
async def readiness_check(
    store: Annotated[ReadingStore, Depends(get_reading_store)],
) -> JSONResponse:
    """Readiness check endpoint.

    Returns:
        200 if ready, 503 if not ready
    """
    service = get_health_service()
    data, is_ready = service.check_readiness(store)

    status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE

    logger.debug("readiness_check", status=data["status"], is_ready=is_ready)
    return JSONResponse(content=data, status_code=status_code)
