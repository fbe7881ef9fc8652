"""
TimeTracker Backend - Time Entry Routes
=======================================

Besides the usual CRUD set, exposes the monthly timesheet of one user:

    GET /time-entries/user/{user_id}/{year}/{month}
        → [TimeEntryModel, ...] ordered by entryDate, not paginated

An unknown user simply has no entries, so the timesheet answers 200 [].
"""

from typing import List

from fastapi import APIRouter, Depends, Path, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.database import get_db_session
from timetracker.exceptions import NotFoundError
from timetracker.routes.params import PageParams, RecordId, location_of, page_params
from timetracker.schemas.common import PagedList, ProblemDetails
from timetracker.schemas.time_entry import TimeEntryInputModel, TimeEntryModel
from timetracker.security import get_current_identity, require_admin
from timetracker.services.time_entry_service import time_entry_service

router = APIRouter(
    prefix="/time-entries",
    tags=["Time Entries"],
    dependencies=[Depends(get_current_identity)],
    responses={401: {"model": ProblemDetails}, 429: {"model": ProblemDetails}},
)


@router.get(
    "/user/{user_id}/{year}/{month}",
    response_model=List[TimeEntryModel],
    summary="Get all time entries of a user for one month",
)
async def get_time_entries_for_month(
    user_id: RecordId,
    year: int = Path(ge=1, le=9999),
    month: int = Path(ge=1, le=12),
    db: AsyncSession = Depends(get_db_session),
) -> List[TimeEntryModel]:
    return await time_entry_service.get_by_user_and_month(db, user_id, year, month)


@router.get(
    "/{entry_id}",
    response_model=TimeEntryModel,
    responses={404: {"model": ProblemDetails}},
    summary="Get a time entry by id",
)
async def get_time_entry(entry_id: RecordId, db: AsyncSession = Depends(get_db_session)) -> TimeEntryModel:
    entry = await time_entry_service.get_by_id(db, entry_id)
    if entry is None:
        raise NotFoundError(resource="time entry", resource_id=entry_id)
    return entry


@router.get("", response_model=PagedList[TimeEntryModel], summary="Get one page of time entries")
async def get_time_entries(
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db_session),
):
    return await time_entry_service.get_page(db, paging.page, paging.size)


@router.post(
    "",
    response_model=TimeEntryModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ProblemDetails},
        403: {"model": ProblemDetails},
        404: {"description": "User or project not found", "model": ProblemDetails},
    },
    summary="Create a time entry at the user's current hour rate",
)
async def create_time_entry(
    data: TimeEntryInputModel,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> TimeEntryModel:
    entry = await time_entry_service.create(db, data)
    if entry is None:
        raise NotFoundError(
            resource="user or project",
            context={"user_id": data.user_id, "project_id": data.project_id},
        )
    response.headers["Location"] = location_of(request, entry.id)
    return entry


@router.put(
    "/{entry_id}",
    response_model=TimeEntryModel,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ProblemDetails},
        403: {"model": ProblemDetails},
        404: {"model": ProblemDetails},
    },
    summary="Update date, hours and description of a time entry",
)
async def update_time_entry(
    entry_id: RecordId,
    data: TimeEntryInputModel,
    db: AsyncSession = Depends(get_db_session),
) -> TimeEntryModel:
    entry = await time_entry_service.update(db, entry_id, data)
    if entry is None:
        raise NotFoundError(resource="time entry", resource_id=entry_id)
    return entry


@router.delete(
    "/{entry_id}",
    dependencies=[Depends(require_admin)],
    responses={403: {"model": ProblemDetails}, 404: {"model": ProblemDetails}},
    summary="Delete a time entry",
)
async def delete_time_entry(entry_id: RecordId, db: AsyncSession = Depends(get_db_session)) -> Response:
    if not await time_entry_service.delete(db, entry_id):
        raise NotFoundError(resource="time entry", resource_id=entry_id)
    return Response(status_code=status.HTTP_200_OK)
