"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import httpx
from fastapi import APIRouter, Depends
from postgrest.exceptions import APIError
from pydantic import BaseModel

from shared.config import get_settings
from ..dependencies import ServiceContainer, get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    tokens: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    container: ServiceContainer = Depends(get_container),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Checks that the users table answers and a signing secret is configured.
    """
    try:
        container.db.table("users").select("id").limit(1).execute()
        database = "connected"
    except (RuntimeError, APIError, httpx.HTTPError):
        database = "unavailable"

    tokens = "configured" if container.settings.jwt_secret else "missing"
    ready = database == "connected" and tokens == "configured"

    return ReadinessResponse(
        status="ready" if ready else "not_ready",
        database=database,
        tokens=tokens,
    )
