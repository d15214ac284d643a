"""Liveness endpoint for load balancers and uptime checks."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from memehub.config import Settings
from memehub.util.observability import SERVICE_VERSION

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: str
    message: str
    environment: str
    version: str
    git_sha: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is serving. Does not touch the database."""
    return HealthResponse(
        status="healthy",
        message="API is running",
        environment=settings.environment,
        version=SERVICE_VERSION,
        git_sha=settings.git_sha,
        timestamp=datetime.now(timezone.utc),
    )
