"""
TimeTracker Backend - Database Session Management
==================================================

What:  Async SQLAlchemy engine, session factory, FastAPI session dependency,
       and startup schema creation.
How:   One engine per process; one AsyncSession per request that commits on
       success and rolls back on error.
When:  Engine is created at module import; sessions are created per request.

Connection Pooling:
    SQLite (default)      - aiosqlite; in-memory URLs share one connection
                            through StaticPool so every session sees the
                            same tables.
    PostgreSQL (asyncpg)  - pool_size / max_overflow / pre_ping from settings,
                            connections recycled hourly.

Schema:
    Tables are created with metadata.create_all at startup. Migration tooling
    is out of scope for this service.
"""

import logging
from typing import AsyncGenerator

from sqlalchemy import BigInteger, Integer, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from timetracker.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine suited to the database behind `database_url`.

    SQLite does not accept pool sizing arguments, and an in-memory SQLite
    database only lives as long as its connection, hence StaticPool.
    """
    echo = settings.log_level == "DEBUG"
    url = make_url(database_url)

    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            return create_async_engine(
                database_url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


engine = build_engine(settings.database_url)

# expire_on_commit=False: view models are built from entities after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models; owns the shared metadata."""
    pass


# 64-bit ids everywhere except SQLite, where only INTEGER PRIMARY KEY
# autoincrements (it is 64-bit there anyway).
BigIntId = BigInteger().with_variant(Integer, "sqlite")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Commits when the route returns normally, rolls back when it raises,
    and always returns the connection to the pool. Services commit their
    own writes through the record store; the commit here is a no-op in
    that case and catches writes from anything else.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_schema(target: AsyncEngine = engine) -> None:
    """Create all tables that do not exist yet."""
    # Registers every mapped class on Base.metadata
    import timetracker.models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_database(target: AsyncEngine = engine) -> None:
    """
    Create the schema, retrying while the database is still starting.

    In docker-compose setups the API container frequently wins the race
    against the database container; a few exponential-backoff attempts
    cover that window. The last failure is re-raised.
    """
    async for attempt in AsyncRetrying(
        retry=retry_if_exception_type((OperationalError, ConnectionError, OSError)),
        stop=stop_after_attempt(settings.db_connect_attempts),
        wait=wait_exponential(
            min=settings.db_connect_min_wait,
            max=settings.db_connect_max_wait,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            await create_schema(target)

    logger.info("Database schema ready")


async def ping_database(target: AsyncEngine = engine) -> None:
    """Run SELECT 1; raises if the database is unreachable."""
    async with target.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def dispose_engine() -> None:
    """Gracefully closes all connections in the pool (application shutdown)."""
    await engine.dispose()
