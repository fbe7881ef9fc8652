"""
TimeTracker Backend - Offset Pagination
========================================

What:  Turns (page, page_size) into one store slice plus paging metadata.
Who:   Every GET collection endpoint (users, clients, projects, time entries).

Arithmetic:
    offset      = (page - 1) * page_size
    items       = store.list(skip=offset, take=page_size)
    total_count = store.count()              (whole collection, unfiltered)
    total_pages = ceil(total_count / page_size)

    Example: 3 users, page=2, size=10
        → items=[], page=2, pageSize=10, totalCount=3, totalPages=1

A page past the end is not an error: it is an empty page with the real
totals, so clients can tell "nothing here" from "no such collection".

Bounds:
    Routes validate page >= 1 and 1 <= page_size <= MAX_PAGE_SIZE before
    calling paginate(), so offset is never negative and the store is never
    asked for an unbounded slice.
"""

from typing import Callable, TypeVar

from timetracker.schemas.common import PagedList
from timetracker.store import RecordStore

ModelT = TypeVar("ModelT")
ViewT = TypeVar("ViewT")


def page_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


async def paginate(
    store: RecordStore,
    page: int,
    page_size: int,
    project: Callable[[ModelT], ViewT],
) -> PagedList[ViewT]:
    """
    Fetch one page from `store` and project each record into a view model.

    Args:
        store:     record store for the collection
        page:      1-based page number
        page_size: maximum number of items on the page
        project:   entity → view model projection (e.g. UserModel.from_user)
    """
    records = await store.list(skip=page_offset(page, page_size), take=page_size)
    total_count = await store.count()

    return PagedList(
        items=[project(record) for record in records],
        page=page,
        page_size=page_size,
        total_count=total_count,
    )
