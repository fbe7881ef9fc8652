"""
TimeTracker Backend - Client Routes
===================================
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.database import get_db_session
from timetracker.exceptions import NotFoundError
from timetracker.routes.params import PageParams, RecordId, location_of, page_params
from timetracker.schemas.client import ClientInputModel, ClientModel
from timetracker.schemas.common import PagedList, ProblemDetails
from timetracker.security import get_current_identity, require_admin
from timetracker.services.client_service import client_service

router = APIRouter(
    prefix="/clients",
    tags=["Clients"],
    dependencies=[Depends(get_current_identity)],
    responses={401: {"model": ProblemDetails}, 429: {"model": ProblemDetails}},
)


@router.get(
    "/{client_id}",
    response_model=ClientModel,
    responses={404: {"model": ProblemDetails}},
    summary="Get a client by id",
)
async def get_client(client_id: RecordId, db: AsyncSession = Depends(get_db_session)) -> ClientModel:
    client = await client_service.get_by_id(db, client_id)
    if client is None:
        raise NotFoundError(resource="client", resource_id=client_id)
    return client


@router.get("", response_model=PagedList[ClientModel], summary="Get one page of clients")
async def get_clients(
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db_session),
):
    return await client_service.get_page(db, paging.page, paging.size)


@router.post(
    "",
    response_model=ClientModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={400: {"model": ProblemDetails}, 403: {"model": ProblemDetails}},
    summary="Create a client",
)
async def create_client(
    data: ClientInputModel,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ClientModel:
    client = await client_service.create(db, data)
    response.headers["Location"] = location_of(request, client.id)
    return client


@router.put(
    "/{client_id}",
    response_model=ClientModel,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ProblemDetails},
        403: {"model": ProblemDetails},
        404: {"model": ProblemDetails},
    },
    summary="Rename a client",
)
async def update_client(
    client_id: RecordId,
    data: ClientInputModel,
    db: AsyncSession = Depends(get_db_session),
) -> ClientModel:
    client = await client_service.update(db, client_id, data)
    if client is None:
        raise NotFoundError(resource="client", resource_id=client_id)
    return client


@router.delete(
    "/{client_id}",
    dependencies=[Depends(require_admin)],
    responses={403: {"model": ProblemDetails}, 404: {"model": ProblemDetails}},
    summary="Delete a client",
)
async def delete_client(client_id: RecordId, db: AsyncSession = Depends(get_db_session)) -> Response:
    if not await client_service.delete(db, client_id):
        raise NotFoundError(resource="client", resource_id=client_id)
    return Response(status_code=status.HTTP_200_OK)
