"""
TimeTracker Backend - TimeEntry Schemas
=======================================

Mutable fields (apply_to allow-list):
    entry_date, hours, description

Never changed by an update:
    user, project   fixed at creation
    hour_rate       snapshot of the user's rate at creation

user_id / project_id are still required on updates so that a PUT body has
the same shape as a POST body; TimeEntryService checks that they resolve.
"""

from datetime import date
from typing import Annotated

from pydantic import Field, StringConstraints

from timetracker.models.time_entry import TimeEntry
from timetracker.schemas.common import CamelModel, Money, ReferenceId

EARLIEST_ENTRY_DATE = date(2019, 1, 1)
LATEST_ENTRY_DATE = date(2100, 1, 1)

Description = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=10000)]


class TimeEntryInputModel(CamelModel):
    """A time entry to add or modify."""

    user_id: ReferenceId = Field(description="Id of the user who did the work")
    project_id: ReferenceId = Field(description="Id of the project the work was for")
    entry_date: date = Field(
        gt=EARLIEST_ENTRY_DATE,
        lt=LATEST_ENTRY_DATE,
        description="Day the work was done (after 2019-01-01, before 2100-01-01)",
    )
    hours: int = Field(ge=1, le=24, description="Whole hours, 1-24")
    description: Description = Field(description="What was done, up to 10000 characters")

    def apply_to(self, entry: TimeEntry) -> None:
        entry.entry_date = self.entry_date
        entry.hours = self.hours
        entry.description = self.description


class TimeEntryModel(CamelModel):
    id: int
    user_id: int
    user_name: str
    project_id: int
    project_name: str
    client_id: int
    client_name: str
    entry_date: date
    hours: int
    hour_rate: Money
    description: str

    @classmethod
    def from_time_entry(cls, entry: TimeEntry) -> "TimeEntryModel":
        return cls(
            id=entry.id,
            user_id=entry.user.id,
            user_name=entry.user.name,
            project_id=entry.project.id,
            project_name=entry.project.name,
            client_id=entry.project.client.id,
            client_name=entry.project.client.name,
            entry_date=entry.entry_date,
            hours=entry.hours,
            hour_rate=entry.hour_rate,
            description=entry.description,
        )
