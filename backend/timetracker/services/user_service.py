"""
TimeTracker Backend - User Service
==================================
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from timetracker.models.user import User
from timetracker.schemas.user import UserInputModel, UserModel
from timetracker.services.base import CrudService

logger = logging.getLogger(__name__)


class UserService(CrudService[User, UserModel]):
    model = User
    resource_name = "user"

    def to_view(self, record: User) -> UserModel:
        return UserModel.from_user(record)

    async def create(self, db: AsyncSession, data: UserInputModel) -> UserModel:
        logger.debug("Creating a new user with name %s", data.name)
        store = self.store(db)
        user = User()
        data.apply_to(user)
        await store.add(user)
        await store.commit()
        return self.to_view(user)

    async def update(
        self, db: AsyncSession, user_id: int, data: UserInputModel
    ) -> Optional[UserModel]:
        """
        Overwrite name and hour rate. Existing time entries keep the rate
        they were created with.
        """
        logger.debug("Updating user with id %s", user_id)
        store = self.store(db)
        user = await store.find(user_id)
        if user is None:
            return None
        data.apply_to(user)
        await store.update(user)
        await store.commit()
        return self.to_view(user)


user_service = UserService()
