"""
OurNotes — Liveness and Health Routes
=======================================

What:  GET / (liveness message) and GET /health (dependency check).
Who:   GET / is what the client and uptime probes hit; GET /health is for
       container health checks and load balancers.

Status levels for /health:
    healthy:   database reachable
    unhealthy: database unreachable
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from ournotes import __version__
from ournotes.schemas.note import HealthResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module load time, for uptime reporting
_start_time = time.time()


@router.get("/", response_model=MessageResponse, summary="Liveness message")
async def root() -> MessageResponse:
    return MessageResponse(message="Our Notes API is running!")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the row store answers a trivial query.",
)
async def health_check() -> HealthResponse:
    """
    Probe the database with SELECT 1 and report the aggregate status.

    Never raises: an unreachable database is reported, not propagated.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        from ournotes.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
