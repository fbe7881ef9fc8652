"""
TimeTracker Backend - Rate Limiting Middleware
===============================================

What:  Applies the per-token cooldown (services/rate_limiter.py) to API calls.
Which: Request paths containing "/api/" (case-insensitive) that carry a
       bearer token. Requests without a token pass through untouched; the
       authentication dependency rejects them later if the route needs one.

Rejection:
    HTTP 429, RFC 7807 problem body with title "Limit reached", plus a
    Retry-After header. The route handler never runs.

Note that the token is used as-is, before signature verification: a
garbage token is limited just like a valid one.
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from timetracker.exceptions import RateLimitExceededError
from timetracker.problems import problem_response
from timetracker.security import extract_bearer_token
from timetracker.services.rate_limiter import TokenRateLimiter

logger = logging.getLogger(__name__)

API_PATH_MARKER = "/api/"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects bearer tokens reused inside the cooldown window."""

    def __init__(self, app, limiter: Optional[TokenRateLimiter] = None, **kwargs):
        super().__init__(app, **kwargs)
        self.limiter = limiter or TokenRateLimiter()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if API_PATH_MARKER not in request.url.path.lower():
            return await call_next(request)

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            return await call_next(request)

        decision = await self.limiter.check(token)
        if decision.allowed:
            return await call_next(request)

        error = RateLimitExceededError(retry_after=decision.retry_after_seconds)
        logger.info(
            "%s %s: %s (retry in %ds)",
            request.method,
            request.url.path,
            error.message,
            error.retry_after,
        )
        return problem_response(
            request,
            status=error.status_code,
            title=error.title,
            slug=error.slug,
            detail=error.message,
            headers={"Retry-After": str(error.retry_after)},
        )
