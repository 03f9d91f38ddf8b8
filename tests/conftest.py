"""
Shared fixtures.

SECRET_KEY and DATABASE_URL must be in the environment before task_api is
imported: Settings() is built at import time and refuses to start without a
signing key.

Each test gets a fresh in-memory SQLite database. StaticPool keeps the single
aiosqlite connection alive so every session sees the same schema.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_FILE", "")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from task_api.config import settings
from task_api.database import Base, get_db
from task_api.main import app
from task_api.models import tasks, user  # noqa: F401
from task_api.services.tokens import TokenService


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def enforce_ownership(monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_TASK_OWNERSHIP", True)


@pytest.fixture
def token_service():
    return TokenService(settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def register(client):
    """Sign a user up and return the issued token."""

    async def _register(username: str, password: str = "p1") -> str:
        response = await client.post("/signup", json={"username": username, "password": password})
        assert response.status_code == 201, response.text
        return response.json()["token"]

    return _register
