"""
TimeTracker Backend - Record Store
===================================

What:  A small persistence facade over one mapped class and one AsyncSession.
Why:   Services speak in find / list / count / add / update / remove / commit
       and never build SQL for the common CRUD paths. Tests can replace a
       store with a mock exposing the same seven coroutines.
How:   Each call maps onto a single SQLAlchemy 2.0 statement or session call.

Ordering:
    list() orders by primary key. The API does not promise an order for
    Users, Clients and Projects pages; a stable order keeps consecutive
    pages free of gaps and duplicates.
"""

from typing import Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class RecordStore(Generic[ModelT]):
    """CRUD access to the rows of `model` through `session`."""

    def __init__(self, session: AsyncSession, model: Type[ModelT]):
        self.session = session
        self.model = model

    async def find(self, record_id: int) -> Optional[ModelT]:
        """Return the record with this primary key, or None."""
        return await self.session.get(self.model, record_id)

    async def list(self, skip: int, take: int) -> List[ModelT]:
        """Return at most `take` records after skipping `skip`, by id."""
        # Negative OFFSET/LIMIT are rejected by most databases
        skip = max(skip, 0)
        take = max(take, 0)
        result = await self.session.execute(
            select(self.model).order_by(self.model.id).offset(skip).limit(take)
        )
        return list(result.scalars().unique().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()

    async def add(self, record: ModelT) -> ModelT:
        """Stage a new record and flush so the database assigns its id."""
        self.session.add(record)
        await self.session.flush()
        return record

    async def update(self, record: ModelT) -> ModelT:
        """Flush pending attribute changes of an already tracked record."""
        self.session.add(record)
        await self.session.flush()
        return record

    async def remove(self, record: ModelT) -> None:
        await self.session.delete(record)
        await self.session.flush()

    async def commit(self) -> None:
        await self.session.commit()

    async def scalars(self, statement) -> Sequence[ModelT]:
        """Run a custom SELECT for queries the CRUD methods do not cover."""
        result = await self.session.execute(statement)
        return result.scalars().unique().all()
