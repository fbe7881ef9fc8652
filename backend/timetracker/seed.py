"""
TimeTracker Backend - Demo Data
===============================

Inserts a small sample data set into an empty database at startup so the
API has something to show right away (SEED_DEMO_DATA=false turns it off).

    Users      John Doe (25/h), Joan Doe (30/h)
    Clients    Client 1, Client 2
    Projects   Project 1, Project 2 → Client 1;  Project 3 → Client 2
    Entries    four entries on 2019-07-01

A database that already holds at least one user is left untouched.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from timetracker.database import async_session_factory
from timetracker.models import Client, Project, TimeEntry, User

logger = logging.getLogger(__name__)


def demo_records() -> list:
    john = User(name="John Doe", hour_rate=Decimal("25"))
    joan = User(name="Joan Doe", hour_rate=Decimal("30"))

    client_1 = Client(name="Client 1")
    client_2 = Client(name="Client 2")

    project_1 = Project(name="Project 1", client=client_1)
    project_2 = Project(name="Project 2", client=client_1)
    project_3 = Project(name="Project 3", client=client_2)

    day = date(2019, 7, 1)
    entries = [
        TimeEntry(user=john, project=project_1, entry_date=day, hours=5,
                  hour_rate=john.hour_rate, description="Time entry description 1"),
        TimeEntry(user=john, project=project_2, entry_date=day, hours=2,
                  hour_rate=john.hour_rate, description="Time entry description 2"),
        TimeEntry(user=john, project=project_3, entry_date=day, hours=1,
                  hour_rate=john.hour_rate, description="Time entry description 3"),
        TimeEntry(user=joan, project=project_3, entry_date=day, hours=8,
                  hour_rate=joan.hour_rate, description="Time entry description 4"),
    ]
    return [john, joan, client_1, client_2, project_1, project_2, project_3, *entries]


async def seed_demo_data(
    session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
) -> bool:
    """Insert the demo records if there are no users yet. True when seeded."""
    async with session_factory() as session:
        existing = await session.scalar(select(func.count()).select_from(User))
        if existing:
            logger.debug("Database already holds %d users, skipping demo data", existing)
            return False

        session.add_all(demo_records())
        await session.commit()

    logger.info("Seeded demo data (2 users, 2 clients, 3 projects, 4 time entries)")
    return True
