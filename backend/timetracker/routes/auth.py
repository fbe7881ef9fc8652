"""
TimeTracker Backend - Demo Token Route
======================================

GET /get-token?name=<name>&admin=<bool>  →  signed bearer token, text/plain

WARNING - NOT FOR PRODUCTION:
    Anyone who can reach this endpoint can mint an admin token. It exists
    so the API can be tried without an identity provider. main.py mounts it
    only when DEMO_TOKEN_ENDPOINT_ENABLED is true, and every issuance is
    logged at WARNING level.
"""

import logging

from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse

from timetracker.services.token_service import token_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.get(
    "/get-token",
    response_class=PlainTextResponse,
    summary="Issue a demo bearer token (not for production)",
)
async def get_token(
    name: str = Query(min_length=1, max_length=100, description="Token subject"),
    admin: bool = Query(default=False, description="Include the admin role claim"),
) -> PlainTextResponse:
    token = token_service.issue(name, admin)
    logger.warning(
        "Issued demo token for '%s' (admin=%s); disable DEMO_TOKEN_ENDPOINT_ENABLED in production",
        name,
        admin,
    )
    return PlainTextResponse(token)
