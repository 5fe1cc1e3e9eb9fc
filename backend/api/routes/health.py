"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import get_settings
from api.dependencies import get_session_machine

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    bootstrap: str
    identity_provider: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(machine=Depends(get_session_machine)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Ready once session bootstrap has finished.
    """
    settings = get_settings()
    bootstrapped = machine.snapshot().bootstrap_done
    return ReadinessResponse(
        status="ready" if bootstrapped else "starting",
        bootstrap="done" if bootstrapped else "pending",
        identity_provider=(
            "configured" if settings.supabase_url and settings.supabase_anon_key else "missing"
        ),
    )
