"""Pytest configuration and fixtures for campus-events.

Unit tests mock the store ports with AsyncMock. Integration and API tests
run the real SQLAlchemy repositories against a throwaway SQLite file
(aiosqlite), created per test from the ORM metadata.
"""

import os
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-campus-events")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STORAGE_ROOT", "./.pytest-storage/event-images")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from campus_events.api.v1.dependencies import get_image_store
from campus_events.application.dtos.event import ImageUpload
from campus_events.core.config import get_settings
from campus_events.core.limiter import limiter
from campus_events.infrastructure.external.storage.protocol import image_extension
from campus_events.infrastructure.persistence.database import (
    Base,
    build_engine,
    build_sessionmaker,
    get_db,
    get_db_transactional,
)
from campus_events.infrastructure.persistence.models import Event
from campus_events.infrastructure.security.jwt import create_access_token
from campus_events.shared.utils.datetime import utc_now

get_settings.cache_clear()


class FakeImageStore:
    """In-memory image store. Set fail_delete to make delete raise."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_delete = False

    async def upload(self, owner_id: str, image: ImageUpload) -> str:
        url = f"memory://{owner_id}/{len(self.objects) + 1}{image_extension(image)}"
        self.objects[url] = image.data
        return url

    async def delete(self, url: str) -> None:
        if self.fail_delete:
            raise OSError(f"cannot delete {url}")
        self.objects.pop(url, None)
        self.deleted.append(url)


@pytest.fixture
def image_store() -> FakeImageStore:
    return FakeImageStore()


@pytest.fixture
async def engine(tmp_path) -> AsyncEngine:
    """Engine over a fresh SQLite file with the full schema."""
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'campus_events.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_event(
    session_factory,
) -> Callable[..., Awaitable[Event]]:
    """Insert an Event row directly (any status, count, or date) and commit it."""

    async def _make_event(**overrides) -> Event:
        values = {
            "title": "Jazz Night",
            "description": "Live music in the atrium",
            "building": "Main Hall",
            "event_date": utc_now() + timedelta(days=1),
            "image_url": None,
            "author_id": "author-1",
            "author_email": "author1@campus.edu",
            "is_anonymous": False,
            "status": "active",
            "report_count": 0,
        }
        values.update(overrides)
        async with session_factory() as session:
            async with session.begin():
                event = Event(**values)
                session.add(event)
        return event

    return _make_event


@pytest.fixture
async def client(session_factory, image_store: FakeImageStore) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), wired to the test database."""
    from campus_events.main import create_app

    app = create_app()

    async def _get_db():
        async with session_factory() as session:
            yield session

    async def _get_db_transactional():
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    app.dependency_overrides[get_image_store] = lambda: image_store

    limiter.enabled = False
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    limiter.enabled = True


def auth_headers_for(
    user_id: str, email: str | None = None, role: str | None = None
) -> dict[str, str]:
    """Bearer headers for a signed-in user."""
    claims = {"sub": user_id, "email": email or f"{user_id}@campus.edu"}
    if role:
        claims["role"] = role
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    return auth_headers_for


def _office_slot(days_ahead: int = 1, hour: int = 12) -> datetime:
    day = utc_now() + timedelta(days=days_ahead)
    return day.replace(hour=hour, minute=0, second=0, microsecond=0)


@pytest.fixture
def office_slot() -> Callable[..., datetime]:
    """UTC instant days_ahead from today at hour:00, inside the default office hours."""
    return _office_slot
