"""
Pytest configuration for the account service tests.

Every test gets a fresh in-memory SQLite database (aiosqlite, StaticPool so
all sessions share the one connection). The app's `get_session` dependency
is overridden to use it, so no Postgres instance is needed.
"""
import os

# Must be set before the app modules build their engine from settings.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import httpx
import pytest
from httpx import ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from account_service.db.session import get_session
from account_service.main import app
import account_service.models.user  # noqa: F401  # register tables on SQLModel.metadata


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine(anyio_backend):
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def _get_test_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _get_test_session
    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
