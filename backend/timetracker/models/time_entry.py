"""
TimeTracker Backend - TimeEntry Model
=====================================

Hours a user spent on a project on a given day.

Invariants:
    - hour_rate is a snapshot of User.hour_rate taken at creation
    - user_id / project_id are fixed once the entry exists

Orphaned Entries:
    user and project load with INNER JOINs, so an entry whose user or
    project row is gone (possible where foreign keys are not enforced,
    e.g. SQLite after a delete) is invisible to every read: GET by id
    answers 404, the monthly timesheet skips it and it never appears in a
    page. The page totalCount is a plain row count and still includes it.

Query Patterns:
    - Page through all entries (store order)
    - Monthly timesheet: WHERE user_id = :id AND entry_date in month
      ORDER BY entry_date, served by idx_time_entries_user_date
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from timetracker.database import Base, BigIntId
from timetracker.models.project import Project
from timetracker.models.user import User


class TimeEntry(Base):
    __tablename__ = "time_entries"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("users.id"), nullable=False)
    project_id: Mapped[int] = mapped_column(BigIntId, ForeignKey("projects.id"), nullable=False)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    hours: Mapped[int] = mapped_column(Integer, nullable=False)
    hour_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    # Joined so the view model (user, project and the project's client) is
    # available from a single query; Project.client chains the third join.
    user: Mapped[User] = relationship(lazy="joined", innerjoin=True)
    project: Mapped[Project] = relationship(lazy="joined", innerjoin=True)

    __table_args__ = (
        Index("idx_time_entries_user_date", "user_id", "entry_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<TimeEntry(id={self.id}, user_id={self.user_id}, "
            f"project_id={self.project_id}, entry_date='{self.entry_date}')>"
        )
