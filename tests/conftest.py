"""
Global test fixtures and configuration.

This module provides base fixtures for all tests:
- In-memory storage, fresh per test
- Database session on an in-memory SQLite engine
- HTTP client with dependency overrides
- Owner fixtures (user_id, auth_headers, other_auth_headers)
"""

import os
import pytest
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables BEFORE importing app
os.environ["MODE"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ACCESS_LOG_ENABLED"] = "false"
os.environ["ASSISTANT_MODE"] = "local"
os.environ.pop("DEMO_USER_ID", None)
os.environ.pop("SENTRY_DSN", None)

from freelanceflow.main import app
from freelanceflow.api.dependencies import get_storage
from freelanceflow.core.security import create_access_token
from freelanceflow.db.base import Base
from freelanceflow.storage.memory import MemoryStorage

TEST_DATABASE_URL = os.environ["DATABASE_URL"]

USER_ID = 1
OTHER_USER_ID = 2


# ==================== Storage ====================

@pytest.fixture
def storage() -> MemoryStorage:
    """
    Fresh in-memory storage for each test.
    """
    return MemoryStorage()


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Session on a private in-memory SQLite database.

    StaticPool keeps a single connection so every query sees the same
    database; the tables are created before and dropped after each test.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    session = session_factory()

    yield session

    await session.close()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


# ==================== FastAPI Client ====================

@pytest.fixture
async def client(storage: MemoryStorage) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for testing FastAPI endpoints.

    Overrides get_storage so endpoints read and write the ``storage`` fixture.
    """

    async def override_get_storage():
        return storage

    app.dependency_overrides[get_storage] = override_get_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ==================== Owners ====================

@pytest.fixture
def user_id() -> int:
    return USER_ID


@pytest.fixture
def other_user_id() -> int:
    return OTHER_USER_ID


@pytest.fixture
def auth_headers(user_id):
    """
    Authentication headers for the main test user.
    """
    token = create_access_token(data={"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user_id):
    """
    Authentication headers for a second, unrelated user.
    """
    token = create_access_token(data={"sub": str(other_user_id)})
    return {"Authorization": f"Bearer {token}"}
