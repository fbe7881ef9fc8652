"""
TimeTracker Backend - Generic CRUD Service
==========================================

The read and delete half of every resource handler. Subclasses supply the
entity class, a resource name for logs, and the entity → view projection;
they add create / update because those differ per entity (foreign keys,
snapshots).
"""

import logging
from typing import Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.database import Base
from timetracker.pagination import paginate
from timetracker.schemas.common import PagedList
from timetracker.store import RecordStore

ModelT = TypeVar("ModelT", bound=Base)
ViewT = TypeVar("ViewT")

logger = logging.getLogger(__name__)


class CrudService(Generic[ModelT, ViewT]):
    model: Type[ModelT]
    resource_name: str = "resource"

    def store(self, db: AsyncSession) -> RecordStore[ModelT]:
        return RecordStore(db, self.model)

    def to_view(self, record: ModelT) -> ViewT:
        raise NotImplementedError

    async def get_by_id(self, db: AsyncSession, record_id: int) -> Optional[ViewT]:
        logger.debug("Getting a %s with id %s", self.resource_name, record_id)
        record = await self.store(db).find(record_id)
        if record is None:
            return None
        return self.to_view(record)

    async def get_page(self, db: AsyncSession, page: int, page_size: int) -> PagedList[ViewT]:
        logger.debug(
            "Getting page %d of %ss with page size %d", page, self.resource_name, page_size
        )
        return await paginate(self.store(db), page, page_size, self.to_view)

    async def delete(self, db: AsyncSession, record_id: int) -> bool:
        """Hard-delete the record. False when it does not exist."""
        logger.debug("Deleting %s with id %s", self.resource_name, record_id)
        store = self.store(db)
        record = await store.find(record_id)
        if record is None:
            return False
        await store.remove(record)
        await store.commit()
        return True
