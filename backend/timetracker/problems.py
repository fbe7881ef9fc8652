"""
TimeTracker Backend - RFC 7807 Problem Responses
=================================================

Builds `application/problem+json` responses. Used by the global exception
handlers and by middleware, which runs outside FastAPI's exception
handling and has to render its own responses.

    {
        "type": "https://timetracker.local/errors/limit-reached",
        "title": "Limit reached",
        "status": 429,
        "detail": "Token limit reached, operation cancelled",
        "instance": "/api/users",
        "requestId": "a1b2c3d4"
    }
"""

from typing import Dict, List, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse

from timetracker.config import settings
from timetracker.middleware.request_id import request_id_var
from timetracker.schemas.common import FieldError, ProblemDetails

PROBLEM_MEDIA_TYPE = "application/problem+json"


def problem_response(
    request: Request,
    status: int,
    title: str,
    slug: str,
    detail: str = "",
    errors: Optional[List[Dict[str, str]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    problem = ProblemDetails(
        type=f"{settings.error_type_base_url}{slug}",
        title=title,
        status=status,
        detail=detail,
        instance=request.url.path,
        request_id=request_id_var.get("") or None,
        errors=[FieldError(**e) for e in errors] if errors else None,
    )
    return JSONResponse(
        status_code=status,
        content=problem.to_content(),
        media_type=PROBLEM_MEDIA_TYPE,
        headers=headers,
    )
