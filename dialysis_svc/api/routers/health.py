"""
Health and readiness endpoints for operational visibility.

This module provides:
- /health: Liveness probe (is the app running?)
- /ready: Readiness probe (is the database reachable?)

Design Choices:
- No authentication required (local single-user service)
- Lightweight dependency checks (non-blocking)
- Machine-readable JSON responses
"""
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from core.dependencies import get_database, get_gemini_service
from repositories.base import Database
from services.gemini_service import GeminiService

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

router = APIRouter(tags=["Health & Observability"])


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class HealthResponse(BaseModel):
    """Response model for /health endpoint."""
    status: str  # "healthy"
    version: str
    timestamp: str  # ISO 8601 UTC


class DependencyStatus(BaseModel):
    """Status of a single dependency."""
    name: str
    status: str  # "ok", "degraded", "unavailable"
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class ReadyResponse(BaseModel):
    """Response model for /ready endpoint."""
    status: str  # "ready", "degraded", "not_ready"
    dependencies: List[DependencyStatus]
    timestamp: str


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


# =============================================================================
# HEALTH ENDPOINT (LIVENESS)
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Check if the application is running. Returns immediately without checking dependencies."
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        timestamp=_utc_timestamp()
    )


# =============================================================================
# READINESS ENDPOINT
# =============================================================================

async def _check_database(db: Database) -> DependencyStatus:
    """
    Check SQLite database connectivity with a trivial query.
    """
    start = time.perf_counter()
    try:
        with db.get_connection() as conn:
            conn.execute("SELECT 1")

        latency_ms = (time.perf_counter() - start) * 1000
        return DependencyStatus(
            name="database",
            status="ok",
            latency_ms=round(latency_ms, 2),
            message="SQLite connection healthy"
        )
    except Exception as e:
        latency_ms = (time.perf_counter() - start) * 1000
        logger.error("Database health check failed", extra={"error": str(e)})
        return DependencyStatus(
            name="database",
            status="unavailable",
            latency_ms=round(latency_ms, 2),
            message=f"Connection failed: {type(e).__name__}"
        )


def _check_gemini(gemini_service: GeminiService) -> DependencyStatus:
    """
    Report whether AI features are configured. No network call is made.
    """
    if gemini_service.is_configured:
        return DependencyStatus(name="gemini", status="ok", message="API key configured")
    return DependencyStatus(
        name="gemini",
        status="degraded",
        message="API key missing; summaries and transcription return fallbacks"
    )


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness probe",
    description="Check if the application is ready to serve requests. "
                "Returns 503 if the database is unavailable."
)
async def readiness_check(
    response: Response,
    db: Database = Depends(get_database),
    gemini_service: GeminiService = Depends(get_gemini_service)
) -> ReadyResponse:
    """
    Readiness probe.

    Returns:
    - 200 with status="ready" if all dependencies are healthy
    - 200 with status="degraded" if the AI service is not configured
    - 503 with status="not_ready" if the database is down
    """
    dependencies = [await _check_database(db), _check_gemini(gemini_service)]

    critical_down = any(
        d.status == "unavailable"
        for d in dependencies
        if d.name == "database"
    )
    any_degraded = any(d.status in ("degraded", "unavailable") for d in dependencies)

    if critical_down:
        status = "not_ready"
        response.status_code = 503
    elif any_degraded:
        status = "degraded"
    else:
        status = "ready"

    return ReadyResponse(
        status=status,
        dependencies=dependencies,
        timestamp=_utc_timestamp()
    )


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@router.get(
    "/",
    summary="API root",
    description="Root endpoint with basic API information."
)
async def root() -> Dict[str, Any]:
    return {
        "service": "Dialysis Companion API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready"
    }
