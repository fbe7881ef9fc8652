"""
TimeTracker Backend - User Schemas
==================================
"""

from decimal import Decimal
from typing import Annotated

from pydantic import Field, StringConstraints

from timetracker.models.user import User
from timetracker.schemas.common import CamelModel, Money

# strip_whitespace first so a name of only spaces fails min_length
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class UserInputModel(CamelModel):
    """A user to add or modify."""

    name: Name = Field(description="Display name, 1-100 characters")
    hour_rate: Decimal = Field(
        gt=0,
        lt=1000,
        max_digits=10,
        decimal_places=2,
        description="Hourly rate, 0 < rate < 1000, at most 2 decimal places",
    )

    def apply_to(self, user: User) -> None:
        """Copy the mutable fields onto `user`; nothing else changes."""
        user.name = self.name
        user.hour_rate = self.hour_rate


class UserModel(CamelModel):
    id: int
    name: str
    hour_rate: Money

    @classmethod
    def from_user(cls, user: User) -> "UserModel":
        return cls(id=user.id, name=user.name, hour_rate=user.hour_rate)
