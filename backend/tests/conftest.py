"""
TimeTracker Backend - Test Configuration (conftest.py)
======================================================

Shared pytest fixtures for the whole suite.

Fixture Hierarchy:
    Plain data / mocks:
    ├── mock_db_session: AsyncMock standing in for an AsyncSession
    ├── admin_token / reader_token: signed bearer tokens
    └── admin_headers / reader_headers: ready-made Authorization headers

    Database (fresh in-memory SQLite per test):
    ├── db_engine → session_factory → db_session
    ├── seeded: demo data inserted into the per-test database
    └── make_app → app → test_client: HTTPX AsyncClient whose requests
                                      get sessions from the per-test database
"""

import os

# Must happen before any timetracker import reads the settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["TOKEN_ISSUER"] = "https://timetracker.test"
os.environ["TOKEN_KEY"] = "test-signing-key-not-for-production-0123456789"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from timetracker.database import build_engine, create_schema, get_db_session  # noqa: E402
from timetracker.services.token_service import token_service  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Mocks and Tokens
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock async database session for service tests.

    Usage:
        mock_db_session.get.return_value = user
        result = await user_service.get_by_id(mock_db_session, 1)
    """
    session = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def admin_token() -> str:
    return token_service.issue("admin", is_admin=True)


@pytest.fixture
def reader_token() -> str:
    return token_service.issue("reader", is_admin=False)


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def reader_headers(reader_token):
    return {"Authorization": f"Bearer {reader_token}"}


# ══════════════════════════════════════════════════════════════════════════
# Database and HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """A private in-memory database with the schema created."""
    engine = build_engine("sqlite+aiosqlite://")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_app(session_factory):
    """
    Build a fresh application whose routes use the per-test database.

    A factory rather than an app so tests can patch settings first:
        monkeypatch.setattr(settings, "rate_limit_enabled", True)
        application = make_app()
    """
    from timetracker.main import create_app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def factory():
        application = create_app()
        application.dependency_overrides[get_db_session] = override_db_session
        return application

    return factory


@pytest.fixture
def app(make_app):
    return make_app()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_get_user(test_client, reader_headers):
            response = await test_client.get("/api/users/1", headers=reader_headers)
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def seeded(session_factory):
    """The demo data set: users 1-2, clients 1-2, projects 1-3, entries 1-4."""
    from timetracker.seed import seed_demo_data

    await seed_demo_data(session_factory)
