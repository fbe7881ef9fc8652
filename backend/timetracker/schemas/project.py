"""
TimeTracker Backend - Project Schemas
=====================================

The client link is not part of apply_to(): ProjectService resolves
client_id to a Client row first (404 when it does not exist) and assigns
the relationship itself.
"""

from pydantic import Field

from timetracker.models.project import Project
from timetracker.schemas.common import CamelModel, ReferenceId
from timetracker.schemas.user import Name


class ProjectInputModel(CamelModel):
    """A project to add or modify."""

    name: Name = Field(description="Project name, 1-100 characters")
    client_id: ReferenceId = Field(description="Id of the client the project belongs to")

    def apply_to(self, project: Project) -> None:
        project.name = self.name


class ProjectModel(CamelModel):
    id: int
    name: str
    client_id: int
    client_name: str

    @classmethod
    def from_project(cls, project: Project) -> "ProjectModel":
        return cls(
            id=project.id,
            name=project.name,
            client_id=project.client.id,
            client_name=project.client.name,
        )
