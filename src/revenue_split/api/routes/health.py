"""Service health endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from revenue_split.api.dependencies import Calendar, DbSession
from revenue_split.models import Employee

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Store reachability plus the state the dashboard depends on."""

    status: str
    timestamp: datetime
    database: str
    current_period: str
    roster_size: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbSession, calendar: Calendar) -> HealthResponse:
    """Report whether the roster table can be read.

    An empty roster is reported as degraded: no revenue event can be split.
    """
    roster_size = None
    try:
        roster_size = await db.scalar(select(func.count()).select_from(Employee))
        database = "healthy"
    except SQLAlchemyError:
        logger.warning("Health check could not read the roster", exc_info=True)
        database = "unhealthy"

    healthy = database == "healthy" and bool(roster_size)
    return HealthResponse(
        status="healthy" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        database=database,
        current_period=calendar.current_period().key,
        roster_size=roster_size,
    )


@router.get("/ready")
async def readiness_check() -> dict[str, str]:
    """Readiness check for container orchestration."""
    return {"status": "ready"}


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    """Liveness check for container orchestration."""
    return {"status": "alive"}
