"""
OrderHub — Request Logging Middleware
======================================

What:  One access-log line per request: method, path, status, duration,
       request id and client IP.
Who:   Applied to every request after RequestIDMiddleware.

Level by status family: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
GET /health is not logged (polled by load balancers).

Never logged: request bodies (passwords) and the Authorization header.
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from orderhub.middleware.request_id import get_request_id

logger = logging.getLogger("orderhub.access")

SKIPPED_PATHS = {"/health"}

ACCESS_LINE = "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s"


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def access_fields(request: Request, status: int, duration_ms: float) -> Dict[str, Any]:
    """Fields of one access-log line, also attached to the record as extras."""
    return {
        "request_id": get_request_id(request),
        "method": request.method,
        "path": request.url.path,
        "status": status,
        "duration_ms": round(duration_ms, 2),
        "client_ip": request.client.host if request.client else "unknown",
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        fields = access_fields(request, response.status_code, (time.perf_counter() - started) * 1000)

        logger.log(level_for_status(response.status_code), ACCESS_LINE, fields, extra=fields)
        return response
