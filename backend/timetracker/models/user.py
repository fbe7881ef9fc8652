"""
TimeTracker Backend - User Model
================================

A person who logs time. `hour_rate` is the rate billed for new time
entries; each TimeEntry copies it at creation, so changing it later never
touches existing entries.
"""

from decimal import Decimal

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from timetracker.database import Base, BigIntId


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    hour_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
