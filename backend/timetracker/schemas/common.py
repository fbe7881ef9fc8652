"""
TimeTracker Backend - Shared Schemas
=====================================

What:  Base model, money type, paged list wrapper, problem details and
       health response shared by every resource.
Why:   Every resource speaks the same wire conventions:
       - camelCase member names (snake_case accepted on input)
       - decimals rendered as JSON numbers
       - list endpoints wrapped in the same PagedList envelope
       - errors rendered as RFC 7807 problem details
"""

from decimal import Decimal
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, computed_field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


# Decimal serialises to a JSON string by default; clients expect a number
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Ids are signed 64-bit in the store; larger values never reach a query
MAX_RECORD_ID = 2**63 - 1

# A reference to another record in an input body (clientId, userId, ...)
ReferenceId = Annotated[int, Field(ge=1, le=MAX_RECORD_ID)]


class CamelModel(BaseModel):
    """Base for every API schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PagedList(CamelModel, Generic[T]):
    """
    One page of items plus the paging metadata.

    total_pages is derived, never stored:
        ceil(total_count / page_size), using integer arithmetic
        e.g. 3 items, size 10 → 1 page; 11 items, size 5 → 3 pages

    Example:
        {"items": [...], "page": 2, "pageSize": 10, "totalCount": 3, "totalPages": 1}
    """

    items: List[T] = Field(description="Items on this page (may be empty)")
    page: int = Field(description="1-based page number that was requested")
    page_size: int = Field(description="Requested page size")
    total_count: int = Field(description="Number of items in the whole collection")

    @computed_field(alias="totalPages")  # type: ignore[misc]
    @property
    def total_pages(self) -> int:
        return count_pages(self.total_count, self.page_size)


def count_pages(total_count: int, page_size: int) -> int:
    """Ceiling of total_count / page_size; 0 for an empty collection."""
    if page_size <= 0:
        return 0
    return -(-total_count // page_size)


class FieldError(BaseModel):
    field: str
    message: str


class ProblemDetails(BaseModel):
    """
    RFC 7807 error body, used for every error response.

    Extension members:
        requestId  correlation id from RequestIDMiddleware
        errors     field-level messages (validation failures only)
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(description="URI identifying the problem type")
    title: str = Field(description="Short, human-readable summary")
    status: int = Field(description="HTTP status code")
    detail: str = Field(default="", description="Explanation of this occurrence")
    instance: str = Field(default="", description="Request path that produced the problem")
    request_id: Optional[str] = Field(default=None, alias="requestId")
    errors: Optional[List[FieldError]] = Field(default=None)

    def to_content(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class HealthResponse(CamelModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since the process started")
