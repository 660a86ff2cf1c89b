"""
ZEE Search Service - Health API Routes

GET /health - liveness
GET /ready  - readiness (503 until upstream configuration is complete)

Patterns Applied:
- Health Check Pattern with a HealthService class
- Pydantic response models

Anti-Patterns Avoided:
- Bare except clauses
- Missing response models
"""

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.core.config import get_settings
from src.core.logging import get_logger

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


# =============================================================================
# Health Service
# =============================================================================


class HealthService:
    """Service class for health check operations.

    Readiness only looks at configuration: the upstream providers are
    unreliable by nature and the search path degrades per source, so their
    availability does not gate traffic.
    """

    def __init__(self, version: str = "0.1.0", service: str = "zee-search-service"):
        """Initialize health service.

        Args:
            version: Service version string
            service: Service name reported by /health
        """
        self._version = version
        self._service = service

    def check_health(self) -> dict[str, Any]:
        """Check basic service health.

        Returns:
            Health status dictionary with status, version, service
        """
        return {
            "status": "healthy",
            "version": self._version,
            "service": self._service,
        }

    def check_readiness(self) -> tuple[dict[str, Any], bool]:
        """Check if the upstream providers are configured.

        Returns:
            Tuple of (readiness dict, is_ready bool)
        """
        settings = get_settings()

        checks = {
            "quran_api_configured": bool(settings.quran_api_url),
            "hadith_api_configured": bool(settings.hadith_api_url),
            "hadith_api_key_configured": bool(settings.hadith_api_key),
        }

        is_ready = all(checks.values())
        result: dict[str, Any] = {
            "status": "ready" if is_ready else "not_ready",
            "checks": checks,
        }
        return result, is_ready


_health_service: HealthService | None = None


def get_health_service() -> HealthService:
    """Get health service instance."""
    global _health_service
    if _health_service is None:
        settings = get_settings()
        _health_service = HealthService(
            version=settings.version, service=settings.service_name
        )
    return _health_service


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Basic health check endpoint for liveness checks",
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
        200: {"description": "Service is ready"},
        503: {"description": "Service is not ready"},
    },
    summary="Readiness Check",
    description="Readiness check endpoint for Kubernetes readiness checks",
)
async def readiness_check() -> JSONResponse:
    """Readiness check endpoint.

    Returns:
        200 if ready, 503 if not ready
    """
    service = get_health_service()
    data, is_ready = service.check_readiness()

    status_code = status.HTTP_200_OK if is_ready else status.HTTP_503_SERVICE_UNAVAILABLE

    logger.debug("readiness_check", status=data["status"], is_ready=is_ready)
    return JSONResponse(content=data, status_code=status_code)
