"""
TimeTracker Backend - Client Model
==================================

A customer that owns projects. Deleting a client does not cascade to its
projects.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from timetracker.database import Base, BigIntId


class Client(Base):
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}')>"
