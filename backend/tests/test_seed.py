"""
TimeTracker Backend - Demo Data Tests
=====================================
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select

from timetracker.models import Client, Project, TimeEntry, User
from timetracker.seed import seed_demo_data


async def count(session, model):
    return await session.scalar(select(func.count()).select_from(model))


class TestSeedDemoData:
    @pytest.mark.asyncio
    async def test_seeds_empty_database(self, session_factory, db_session):
        assert await seed_demo_data(session_factory) is True

        assert await count(db_session, User) == 2
        assert await count(db_session, Client) == 2
        assert await count(db_session, Project) == 3
        assert await count(db_session, TimeEntry) == 4

    @pytest.mark.asyncio
    async def test_entries_carry_the_user_rate(self, session_factory, db_session):
        await seed_demo_data(session_factory)

        entry = await db_session.get(TimeEntry, 4)

        assert entry.user.name == "Joan Doe"
        assert entry.hour_rate == Decimal("30")
        assert entry.project.client.name == "Client 2"

    @pytest.mark.asyncio
    async def test_leaves_populated_database_alone(self, session_factory, db_session):
        await seed_demo_data(session_factory)

        assert await seed_demo_data(session_factory) is False
        assert await count(db_session, User) == 2
