"""
TimeTracker Backend - User Routes
=================================

Reads need any valid bearer token; create / update / delete need the
admin role.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.database import get_db_session
from timetracker.exceptions import NotFoundError
from timetracker.routes.params import PageParams, RecordId, location_of, page_params
from timetracker.schemas.common import PagedList, ProblemDetails
from timetracker.schemas.user import UserInputModel, UserModel
from timetracker.security import get_current_identity, require_admin
from timetracker.services.user_service import user_service

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(get_current_identity)],
    responses={401: {"model": ProblemDetails}, 429: {"model": ProblemDetails}},
)


@router.get(
    "/{user_id}",
    response_model=UserModel,
    responses={404: {"model": ProblemDetails}},
    summary="Get a user by id",
)
async def get_user(user_id: RecordId, db: AsyncSession = Depends(get_db_session)) -> UserModel:
    user = await user_service.get_by_id(db, user_id)
    if user is None:
        raise NotFoundError(resource="user", resource_id=user_id)
    return user


@router.get("", response_model=PagedList[UserModel], summary="Get one page of users")
async def get_users(
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db_session),
):
    return await user_service.get_page(db, paging.page, paging.size)


@router.post(
    "",
    response_model=UserModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={400: {"model": ProblemDetails}, 403: {"model": ProblemDetails}},
    summary="Create a user",
)
async def create_user(
    data: UserInputModel,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> UserModel:
    user = await user_service.create(db, data)
    response.headers["Location"] = location_of(request, user.id)
    return user


@router.put(
    "/{user_id}",
    response_model=UserModel,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ProblemDetails},
        403: {"model": ProblemDetails},
        404: {"model": ProblemDetails},
    },
    summary="Update a user's name and hour rate",
)
async def update_user(
    user_id: RecordId,
    data: UserInputModel,
    db: AsyncSession = Depends(get_db_session),
) -> UserModel:
    user = await user_service.update(db, user_id, data)
    if user is None:
        raise NotFoundError(resource="user", resource_id=user_id)
    return user


@router.delete(
    "/{user_id}",
    dependencies=[Depends(require_admin)],
    responses={403: {"model": ProblemDetails}, 404: {"model": ProblemDetails}},
    summary="Delete a user",
)
async def delete_user(user_id: RecordId, db: AsyncSession = Depends(get_db_session)) -> Response:
    if not await user_service.delete(db, user_id):
        raise NotFoundError(resource="user", resource_id=user_id)
    return Response(status_code=status.HTTP_200_OK)
