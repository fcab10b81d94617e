"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    generator: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether Supabase and the Gemini generator are configured.
    Article generation is optional, so a missing Gemini key does not
    make the API unready.
    """
    settings = get_settings()
    database = "configured" if settings.supabase_url else "not_configured"
    generator = "configured" if settings.gemini_api_key else "not_configured"
    return ReadinessResponse(
        status="ready" if database == "configured" else "not_ready",
        database=database,
        generator=generator,
    )
