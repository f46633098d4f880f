"""Liveness and database reachability check."""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter
from pydantic import BaseModel

from src.core.config.settings import settings
from src.infrastructure.database import check_database_health

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    env: str
    services: Dict[str, str]
    timestamp: datetime


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report ``ok`` when the database answers, ``degraded`` otherwise."""
    database_healthy = await check_database_health()
    return HealthResponse(
        status="ok" if database_healthy else "degraded",
        env=settings.APP_ENV,
        services={"database": "healthy" if database_healthy else "unhealthy"},
        timestamp=datetime.now(timezone.utc),
    )
