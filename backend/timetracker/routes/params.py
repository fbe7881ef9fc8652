"""
TimeTracker Backend - Shared Route Parameters
=============================================
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Path, Query, Request

from timetracker.config import settings
from timetracker.schemas.common import MAX_RECORD_ID

# Path ids outside the stored range are invalid input, not "not found"
RecordId = Annotated[int, Path(ge=1, le=MAX_RECORD_ID, description="Record id")]


@dataclass
class PageParams:
    page: int
    size: int


def page_params(
    page: int = Query(default=1, ge=1, description="1-based page number"),
    size: int = Query(
        default=settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description=f"Items per page (max {settings.max_page_size})",
    ),
) -> PageParams:
    return PageParams(page=page, size=size)


def location_of(request: Request, record_id: int) -> str:
    """Collection path of the current request joined with the new id."""
    return f"{request.url.path.rstrip('/')}/{record_id}"
