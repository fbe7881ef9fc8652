"""
TimeTracker Backend - Health Check Route
========================================

What:  Liveness / readiness check for Docker and load balancers.
How:   Runs SELECT 1 against the database.

Status levels:
    healthy:   database reachable   (HTTP 200)
    unhealthy: database unreachable (HTTP 503, stop routing traffic)

Not under /api/, so neither authentication nor the rate limiter applies.
"""

import logging
import time

from fastapi import APIRouter, Response, status
from sqlalchemy.exc import SQLAlchemyError

from timetracker import __version__
from timetracker.database import ping_database
from timetracker.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await ping_database()
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", e)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
