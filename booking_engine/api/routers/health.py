"""
Health check endpoints for monitoring and orchestration.

- /health: Basic liveness check (always returns 200)
- /health/ready: Readiness check (database reachable when running in SQL mode)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from booking_engine.api.dependencies import get_session
from booking_engine.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "booking-engine"


@router.get("/health")
async def health_check():
    """Liveness check: 200 OK while the application is running."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/ready")
async def health_check_ready(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
):
    """
    Readiness check.

    In-memory mode is always ready; SQL mode requires the database to answer
    a trivial query. Returns 503 when not ready to accept requests.
    """
    if settings.use_in_memory or session is None:
        return {"status": "ready", "checks": {"storage": "in_memory"}}

    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
    except SQLAlchemyError as exc:
        logger.error("Readiness check: Database unhealthy", exc_info=exc)
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"database": "unhealthy"}},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
