"""
TimeTracker Backend - Access Log Middleware
===========================================

One line per request on the "timetracker.access" logger:

    GET /api/users 200 3.2ms [a1b2c3d4] alice from 127.0.0.1
    DELETE /api/users/1 403 1.1ms [5e6f7a8b] bob from 127.0.0.1
    GET /api/users 429 0.3ms [9c0d1e2f] - from 127.0.0.1

The caller name comes from the identity the authentication dependency
leaves on request.state; "-" when the request never got that far (no token,
rate limited, public route).

Level follows the status class (5xx ERROR, 4xx WARNING, else INFO), so
401/403/429 storms are visible without turning on DEBUG. /health is not
logged. The Authorization header and request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from timetracker.middleware.request_id import request_id_var

logger = logging.getLogger("timetracker.access")

SKIPPED_PATHS = {"/health"}


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        identity = getattr(request.state, "identity", None)
        subject = identity.subject if identity is not None else "-"
        rid = request_id_var.get("")
        logger.log(
            level_for(response.status_code),
            "%s %s %d %.1fms [%s] %s from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            subject,
            request.client.host if request.client else "unknown",
            extra={"request_id": rid, "subject": subject},
        )
        return response
