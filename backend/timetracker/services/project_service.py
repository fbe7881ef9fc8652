"""
TimeTracker Backend - Project Service
=====================================

Every project belongs to a client. Both create and update look the client
up before touching the project; an unknown client_id returns None (404)
and nothing is written.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.models.client import Client
from timetracker.models.project import Project
from timetracker.schemas.project import ProjectInputModel, ProjectModel
from timetracker.services.base import CrudService
from timetracker.store import RecordStore

logger = logging.getLogger(__name__)


class ProjectService(CrudService[Project, ProjectModel]):
    model = Project
    resource_name = "project"

    def to_view(self, record: Project) -> ProjectModel:
        return ProjectModel.from_project(record)

    async def create(
        self, db: AsyncSession, data: ProjectInputModel
    ) -> Optional[ProjectModel]:
        logger.debug("Creating a new project with name %s", data.name)
        client = await RecordStore(db, Client).find(data.client_id)
        if client is None:
            logger.debug("Client %s not found, project not created", data.client_id)
            return None

        store = self.store(db)
        project = Project(client=client)
        data.apply_to(project)
        await store.add(project)
        await store.commit()
        return self.to_view(project)

    async def update(
        self, db: AsyncSession, project_id: int, data: ProjectInputModel
    ) -> Optional[ProjectModel]:
        """Rename the project and (re)assign its client."""
        logger.debug("Updating project with id %s", project_id)
        store = self.store(db)
        project = await store.find(project_id)
        client = await RecordStore(db, Client).find(data.client_id)
        if project is None or client is None:
            return None

        project.client = client
        data.apply_to(project)
        await store.update(project)
        await store.commit()
        return self.to_view(project)


project_service = ProjectService()
