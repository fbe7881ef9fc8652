"""
TimeTracker Backend - Project Routes
====================================

Create and update answer 404 when the body's clientId does not exist;
nothing is written in that case.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.database import get_db_session
from timetracker.exceptions import NotFoundError
from timetracker.routes.params import PageParams, RecordId, location_of, page_params
from timetracker.schemas.common import PagedList, ProblemDetails
from timetracker.schemas.project import ProjectInputModel, ProjectModel
from timetracker.security import get_current_identity, require_admin
from timetracker.services.project_service import project_service

router = APIRouter(
    prefix="/projects",
    tags=["Projects"],
    dependencies=[Depends(get_current_identity)],
    responses={401: {"model": ProblemDetails}, 429: {"model": ProblemDetails}},
)


@router.get(
    "/{project_id}",
    response_model=ProjectModel,
    responses={404: {"model": ProblemDetails}},
    summary="Get a project by id",
)
async def get_project(project_id: RecordId, db: AsyncSession = Depends(get_db_session)) -> ProjectModel:
    project = await project_service.get_by_id(db, project_id)
    if project is None:
        raise NotFoundError(resource="project", resource_id=project_id)
    return project


@router.get("", response_model=PagedList[ProjectModel], summary="Get one page of projects")
async def get_projects(
    paging: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db_session),
):
    return await project_service.get_page(db, paging.page, paging.size)


@router.post(
    "",
    response_model=ProjectModel,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ProblemDetails},
        403: {"model": ProblemDetails},
        404: {"description": "Client not found", "model": ProblemDetails},
    },
    summary="Create a project for an existing client",
)
async def create_project(
    data: ProjectInputModel,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectModel:
    project = await project_service.create(db, data)
    if project is None:
        raise NotFoundError(resource="client", resource_id=data.client_id)
    response.headers["Location"] = location_of(request, project.id)
    return project


@router.put(
    "/{project_id}",
    response_model=ProjectModel,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ProblemDetails},
        403: {"model": ProblemDetails},
        404: {"description": "Project or client not found", "model": ProblemDetails},
    },
    summary="Rename a project and (re)assign its client",
)
async def update_project(
    project_id: RecordId,
    data: ProjectInputModel,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectModel:
    project = await project_service.update(db, project_id, data)
    if project is None:
        raise NotFoundError(resource="project", resource_id=project_id)
    return project


@router.delete(
    "/{project_id}",
    dependencies=[Depends(require_admin)],
    responses={403: {"model": ProblemDetails}, 404: {"model": ProblemDetails}},
    summary="Delete a project",
)
async def delete_project(project_id: RecordId, db: AsyncSession = Depends(get_db_session)) -> Response:
    if not await project_service.delete(db, project_id):
        raise NotFoundError(resource="project", resource_id=project_id)
    return Response(status_code=status.HTTP_200_OK)
