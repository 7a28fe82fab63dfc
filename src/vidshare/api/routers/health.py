"""Health check endpoint - no authentication required."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from vidshare import __version__
from vidshare.api.deps import get_db_manager
from vidshare.api.routers.responses import HEALTH_ERRORS
from vidshare.api.schemas.health import HealthChecks, HealthStatus
from vidshare.config.database import DatabaseManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus, responses=HEALTH_ERRORS)
async def health_check(
    db_manager: DatabaseManager = Depends(get_db_manager),
) -> HealthStatus:
    """
    Health check endpoint - no authentication required.

    Reports the application version and whether the database answers a
    trivial query.
    """
    db_status = "disconnected"
    db_latency_ms: Optional[int] = None
    try:
        start = time.monotonic()
        async for session in db_manager.get_session():
            await session.execute(text("SELECT 1"))
        db_latency_ms = int((time.monotonic() - start) * 1000)
        db_status = "connected"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check could not reach the database: %s", e)

    return HealthStatus(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        timestamp=datetime.now(timezone.utc),
        checks=HealthChecks(database_latency_ms=db_latency_ms),
    )
