"""
Health check API endpoints.

Routes: GET /health

Dependencies: rag_starter.configs
System role: Health check HTTP API
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from rag_starter.api.deps import get_settings_dependency
from rag_starter.configs import Settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    environment: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> HealthResponse:
    """Basic health check."""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
    )
