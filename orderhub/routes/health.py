"""
OrderHub — Health Check Route
==============================

What:  Liveness/readiness check for Docker and load balancers.
How:   Runs SELECT 1 against the database and reports uptime.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)

Not part of the published API document.
"""

import logging
import time
from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from orderhub import __version__
from orderhub.database import engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", include_in_schema=False)
async def health_check() -> JSONResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    body: Dict[str, Any] = {
        "status": overall,
        "version": __version__,
        "database": db_status,
        "uptime_seconds": round(time.time() - _start_time, 2),
    }
    return JSONResponse(status_code=200 if overall == "healthy" else 503, content=body)
