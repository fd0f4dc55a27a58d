"""
Pytest fixtures for test database, client, and sample events.

Each test gets its own SQLite file under tmp_path with the schema created
from the models, so tests are isolated without a running PostgreSQL.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from evently.main import app
from evently.db.base import Base
from evently.db.session import get_db
from evently.models import Event


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests each get a committing session on the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def event_payload() -> dict:
    """Raw event fields as a form would submit them."""
    return {
        "title": "  Python Meetup: Async Deep Dive! ",
        "description": "An evening of asyncio talks",
        "overview": "Three talks and pizza",
        "image": "https://images.example.com/events/python-meetup.png",
        "venue": "Oslo Science Park",
        "location": "Oslo, Norway",
        "date": "2026-11-20",
        "time": "6:30pm",
        "mode": "hybrid",
        "audience": "Developers",
        "organizer": "Oslo Python Group",
        "agenda": [" Doors open ", "Talks", "Networking"],
        "tags": ["python", "asyncio"],
    }


async def _insert_event(db_session: AsyncSession, **overrides) -> Event:
    fields = {
        "title": "Test Concert",
        "slug": "test-concert",
        "description": "A test event",
        "overview": "Live music",
        "image": "https://images.example.com/concert.png",
        "venue": "Test Venue",
        "location": "Bergen",
        "date": "2026-12-01",
        "time": "20:00",
        "mode": "offline",
        "audience": "Everyone",
        "organizer": "Test Org",
        "agenda": ["Support act", "Main act"],
        "tags": ["music", "live"],
    }
    fields.update(overrides)
    event = Event(**fields)
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession) -> Event:
    """A stored event with canonical fields."""
    return await _insert_event(db_session)


@pytest_asyncio.fixture
async def related_events(db_session: AsyncSession, test_event: Event) -> list[Event]:
    """One event sharing a tag with test_event and one sharing none."""
    shared = await _insert_event(
        db_session, title="Jazz Night", slug="jazz-night", tags=["jazz", "live"]
    )
    unrelated = await _insert_event(
        db_session, title="Data Workshop", slug="data-workshop", tags=["data"]
    )
    return [shared, unrelated]
