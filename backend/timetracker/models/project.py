"""
TimeTracker Backend - Project Model
===================================

A project always belongs to exactly one client. The client is loaded
eagerly (joined) because every Project view model includes the client name,
and async sessions cannot lazy-load after the fact.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from timetracker.database import Base, BigIntId
from timetracker.models.client import Client


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    client_id: Mapped[int] = mapped_column(
        BigIntId, ForeignKey("clients.id"), nullable=False, index=True
    )

    client: Mapped[Client] = relationship(lazy="joined", innerjoin=True)

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name='{self.name}', client_id={self.client_id})>"
