"""Pytest configuration and shared fixtures for API and service tests."""

import os
import tempfile
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import delete

# Set test DB before app imports so config/engine use it
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "practice_tracker_test.db"),
)
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("RATE_LIMIT_DEFAULT", "10000/minute")

from practice_tracker.api.deps import get_now
from practice_tracker.core.auth import hash_password
from practice_tracker.db.base import Base
from practice_tracker.db.session import async_session_maker, engine, init_db
from practice_tracker.main import app
from practice_tracker.models.user import User

# Noon UTC, so "same day" offsets of a few hours stay on the date
FIXED_NOW = datetime(2026, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


async def _clear_all():
    """Delete all rows in reverse dependency order so tests start clean."""
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(delete(table))


@pytest_asyncio.fixture
async def clean_db():
    """Create tables if missing and empty them so the test has a clean DB."""
    await init_db()
    await _clear_all()
    yield
    await engine.dispose()


@pytest.fixture
def clock():
    """Pin the API's notion of "now"; tests move clock.now to cross day boundaries."""
    c = Clock(FIXED_NOW)
    app.dependency_overrides[get_now] = c
    yield c
    app.dependency_overrides.pop(get_now, None)


@pytest_asyncio.fixture
async def client(clean_db, clock):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def session(clean_db):
    """A session for service-level tests; commit explicitly where later reads need it."""
    async with async_session_maker() as s:
        yield s
        await s.rollback()


async def create_user(username: str, password: str = "password123") -> User:
    async with async_session_maker() as s:
        user = User(
            username=username,
            password_hash=hash_password(password),
            create_time=FIXED_NOW,
        )
        s.add(user)
        await s.commit()
        await s.refresh(user)
        return user


@pytest_asyncio.fixture
async def test_user(clean_db):
    """Create a user via DB (committed) and return (user_id, username, token)."""
    user = await create_user("alice")
    token = app.state.token_service.issue(user.id)
    return user.id, user.username, token


@pytest_asyncio.fixture
async def other_user(clean_db):
    user = await create_user("bob")
    token = app.state.token_service.issue(user.id)
    return user.id, user.username, token


@pytest.fixture
def auth_headers(test_user):
    """Return dict of Authorization header for test_user."""
    _, __, token = test_user
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(other_user):
    _, __, token = other_user
    return {"Authorization": f"Bearer {token}"}
