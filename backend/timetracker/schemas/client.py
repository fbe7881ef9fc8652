"""
TimeTracker Backend - Client Schemas
====================================
"""

from pydantic import Field

from timetracker.models.client import Client
from timetracker.schemas.common import CamelModel
from timetracker.schemas.user import Name


class ClientInputModel(CamelModel):
    """A client to add or modify."""

    name: Name = Field(description="Client name, 1-100 characters")

    def apply_to(self, client: Client) -> None:
        client.name = self.name


class ClientModel(CamelModel):
    id: int
    name: str

    @classmethod
    def from_client(cls, client: Client) -> "ClientModel":
        return cls(id=client.id, name=client.name)
