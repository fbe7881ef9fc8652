"""
TimeTracker Backend - Time Entry Service
========================================

Creation:
    1. Resolve user_id and project_id (None → 404, nothing written)
    2. Copy the user's current hour_rate onto the entry
    3. Apply entry_date / hours / description from the input

Update:
    Only entry_date, hours and description change. The entry keeps its
    user, project and hour_rate. user_id / project_id in the body must
    still resolve, otherwise the update is refused with a 404.

Monthly timesheet:
    All entries of one user with entry_date between the first and the last
    day of the month (inclusive), ordered by entry_date (then id). Not paginated.
"""

import calendar
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.models.project import Project
from timetracker.models.time_entry import TimeEntry
from timetracker.models.user import User
from timetracker.schemas.time_entry import TimeEntryInputModel, TimeEntryModel
from timetracker.services.base import CrudService
from timetracker.store import RecordStore

logger = logging.getLogger(__name__)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of the month, both inclusive."""
    # Inclusive end: December 9999 has no "first of next month"
    _, last_day = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, last_day)


class TimeEntryService(CrudService[TimeEntry, TimeEntryModel]):
    model = TimeEntry
    resource_name = "time entry"

    def to_view(self, record: TimeEntry) -> TimeEntryModel:
        return TimeEntryModel.from_time_entry(record)

    async def _resolve_references(self, db: AsyncSession, data: TimeEntryInputModel):
        user = await RecordStore(db, User).find(data.user_id)
        project = await RecordStore(db, Project).find(data.project_id)
        return user, project

    async def create(
        self, db: AsyncSession, data: TimeEntryInputModel
    ) -> Optional[TimeEntryModel]:
        logger.debug(
            "Creating a new time entry for user %s, project %s and date %s",
            data.user_id,
            data.project_id,
            data.entry_date,
        )
        user, project = await self._resolve_references(db, data)
        if user is None or project is None:
            return None

        store = self.store(db)
        entry = TimeEntry(user=user, project=project, hour_rate=user.hour_rate)
        data.apply_to(entry)
        await store.add(entry)
        await store.commit()
        return self.to_view(entry)

    async def update(
        self, db: AsyncSession, entry_id: int, data: TimeEntryInputModel
    ) -> Optional[TimeEntryModel]:
        logger.debug("Updating time entry with id %s", entry_id)
        store = self.store(db)
        entry = await store.find(entry_id)
        if entry is None:
            return None
        user, project = await self._resolve_references(db, data)
        if user is None or project is None:
            return None

        data.apply_to(entry)
        await store.update(entry)
        await store.commit()
        return self.to_view(entry)

    async def get_by_user_and_month(
        self, db: AsyncSession, user_id: int, year: int, month: int
    ) -> List[TimeEntryModel]:
        logger.debug(
            "Getting all time entries for month %d-%02d for user with id %s",
            year,
            month,
            user_id,
        )
        start, end = month_bounds(year, month)
        entries = await self.store(db).scalars(
            select(TimeEntry)
            .where(
                TimeEntry.user_id == user_id,
                TimeEntry.entry_date >= start,
                TimeEntry.entry_date <= end,
            )
            .order_by(TimeEntry.entry_date, TimeEntry.id)
        )
        return [self.to_view(entry) for entry in entries]


time_entry_service = TimeEntryService()
