"""Shared pytest fixtures configured to use SQLite in-memory for unit tests."""

import logging
import os

# Tell app lifespan to skip real DB init, must happen before the app is imported
os.environ.setdefault("SKIP_LIFESPAN_DB", "1")

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.diaryx.config import Settings, get_settings
from src.diaryx.core.models import BaseModel
from src.diaryx.database import get_db_session
from src.diaryx.main import app
from src.diaryx.security.jwt import create_access_token

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@pytest.fixture(scope="session")
def test_settings():
    """Override settings for testing using SQLite in-memory DB."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        debug=True,
        skip_lifespan_db=True,
    )


@pytest.fixture
async def test_engine(test_settings):
    """Fresh SQLite in-memory engine per test."""
    engine = create_async_engine(
        test_settings.database_url,
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Database session bound to the per-test engine."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def override_get_db(test_session):
    """Override the get_db dependency."""

    async def _override_get_db():
        yield test_session

    return _override_get_db


@pytest.fixture
def test_app(override_get_db, test_settings):
    """Create test FastAPI app with overridden dependencies."""
    app.dependency_overrides[get_db_session] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    """Sync client for endpoints that never reach the database."""
    return TestClient(app)


@pytest.fixture
async def async_client(test_app):
    """Async client sharing the test event loop with the DB session."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


def make_auth_headers(user_id: str, email: str = None) -> dict:
    """Bearer header for a token carrying ``sub`` and optionally ``email``."""
    claims = {"sub": user_id}
    if email is not None:
        claims["email"] = email
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


@pytest.fixture
def auth_headers():
    """Headers for alice, who owns notes in most tests."""
    return make_auth_headers("user-alice", "alice@example.com")


@pytest.fixture
def bob_headers():
    """Headers for bob, the usual share recipient."""
    return make_auth_headers("user-bob", "Bob@Example.com")


@pytest.fixture
def shared_markdown():
    """A note that shares the ``friends`` term with bob."""
    return (
        "---\n"
        "visibility: [friends]\n"
        "visibility_emails:\n"
        "  friends: [bob@example.com]\n"
        "---\n"
        "Hello friends"
    )


@pytest.fixture
def headers_for():
    """Factory for bearer headers of arbitrary callers."""
    return make_auth_headers
