"""
Health check endpoints.

Provides endpoints for monitoring application health.
"""

import time

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings, get_settings

router = APIRouter()

_STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    uptime_seconds: float
    storage: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        uptime_seconds=round(time.monotonic() - _STARTED_AT, 3),
        storage=settings.storage_backend,
    )
