"""
TimeTracker Backend - Client Service
====================================
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.models.client import Client
from timetracker.schemas.client import ClientInputModel, ClientModel
from timetracker.services.base import CrudService

logger = logging.getLogger(__name__)


class ClientService(CrudService[Client, ClientModel]):
    model = Client
    resource_name = "client"

    def to_view(self, record: Client) -> ClientModel:
        return ClientModel.from_client(record)

    async def create(self, db: AsyncSession, data: ClientInputModel) -> ClientModel:
        logger.debug("Creating a new client with name %s", data.name)
        store = self.store(db)
        client = Client()
        data.apply_to(client)
        await store.add(client)
        await store.commit()
        return self.to_view(client)

    async def update(
        self, db: AsyncSession, client_id: int, data: ClientInputModel
    ) -> Optional[ClientModel]:
        logger.debug("Updating client with id %s", client_id)
        store = self.store(db)
        client = await store.find(client_id)
        if client is None:
            return None
        data.apply_to(client)
        await store.update(client)
        await store.commit()
        return self.to_view(client)


client_service = ClientService()
