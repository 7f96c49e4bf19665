"""Shared pytest fixtures for unit and integration tests."""

import os

# Settings are read at import time; DATABASE_URL is replaced per test below
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.config import settings
from app.database import Database


@pytest.fixture
def database_url(tmp_path) -> str:
    """File-backed SQLite so concurrent sessions get their own connections."""
    return f"sqlite+aiosqlite:///{tmp_path / 'roster.db'}"


@pytest.fixture
def api_base() -> str:
    """Base URL for API requests."""
    return f"http://test{settings.API_PREFIX}"


@pytest.fixture
async def database(database_url: str):
    """Fresh storage handle with both tables created."""
    db = Database(database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database: Database):
    async with database.session_factory() as s:
        yield s


@pytest.fixture
async def async_client(api_base: str, database_url: str, monkeypatch):
    """
    Async HTTP client running the app lifespan against a per-test database.
    """
    monkeypatch.setattr(settings, "DATABASE_URL", database_url)
    async with app.router.lifespan_context(app):
        await app.state.database.create_all()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url=api_base, timeout=30.0) as client:
            yield client


async def add_students(client: AsyncClient, api_base: str, names) -> None:
    """Create one student per name, in order."""
    for roll, name in enumerate(names, start=1):
        resp = await client.post(
            f"{api_base}/addstudent",
            json={"name": name, "rollNo": roll, "class": "5A"},
        )
        assert resp.status_code == 200, resp.text
