import os

# Must be set before the app (and its engine) is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.models.base import Base
from app.models.user_model import Users
from app.core.dependencies import get_current_user, get_db

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def mock_db_session():
    return AsyncMock(spec=AsyncSession)


@pytest.fixture(autouse=True)
def override_get_db(mock_db_session):
    async def _override():
        yield mock_db_session
    app.dependency_overrides[get_db] = _override
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
async def db_session():
    """
    Isolated in-memory SQLite session with all tables created.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def mock_user():
    return Users(
        id=1,
        name="Test User",
        email="testuser@example.com",
        role="user",
        status="active",
        is_subscribed=False,
        daily_search_count=0,
    )


@pytest.fixture
def authenticated_client(mock_user):
    """Provide an authenticated client for testing (as regular user)."""
    app.dependency_overrides[get_current_user] = lambda: mock_user
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture
def admin_client():
    """Provide an authenticated client as admin."""
    mock_admin = Users(
        id=2,
        name="Admin User",
        email="admin@example.com",
        role="admin",
        status="active",
        is_subscribed=False,
        daily_search_count=0,
    )
    app.dependency_overrides[get_current_user] = lambda: mock_admin
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.pop(get_current_user, None)
