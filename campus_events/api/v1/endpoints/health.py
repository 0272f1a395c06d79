"""Health check endpoints: liveness and database readiness."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from campus_events.core.config import get_settings
from campus_events.infrastructure.persistence.database import get_db
from campus_events.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(db: Annotated[AsyncSession, Depends(get_db)]) -> ReadinessResponse:
    """Return 200 when the database answers; store failures surface as 503."""
    await db.execute(text("SELECT 1"))
    return ReadinessResponse()
