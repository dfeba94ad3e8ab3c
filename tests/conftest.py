"""
Shared fixtures: a throwaway SQLite database per test, seeded users, an event
with guests, a venue/room, and an HTTP client bound to the same database.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Dict, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event as sa_event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from venue_seating_platform.database import get_db
from venue_seating_platform.main import app
from venue_seating_platform.models import Base, Event, Guest, Room, RoomType, User, Venue
from venue_seating_platform.utils.auth import create_access_token


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'seating.db'}")

    # SQLite leaves foreign keys unenforced unless asked, per connection
    @sa_event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


async def _create_user(db: AsyncSession, email: str, first_name: str) -> User:
    user = User(email=email, first_name=first_name, last_name="Tester")
    db.add(user)
    await db.commit()
    return user


@pytest_asyncio.fixture
async def owner(db_session) -> User:
    return await _create_user(db_session, "owner@example.com", "Olivia")


@pytest_asyncio.fixture
async def other_user(db_session) -> User:
    return await _create_user(db_session, "intruder@example.com", "Ivan")


@pytest_asyncio.fixture
async def event(db_session, owner) -> Event:
    event = Event(
        name="Annual Gala",
        description="Black tie dinner",
        event_date=datetime.now(timezone.utc) + timedelta(days=30),
        owner_id=owner.id,
    )
    db_session.add(event)
    await db_session.commit()
    return event


@pytest_asyncio.fixture
async def guests(db_session, event) -> List[Guest]:
    guests = [
        Guest(event_id=event.id, name=f"Guest {index}", email=f"guest{index}@example.com")
        for index in range(1, 5)
    ]
    db_session.add_all(guests)
    await db_session.commit()
    return guests


@pytest_asyncio.fixture
async def venue(db_session, owner) -> Venue:
    venue = Venue(
        name="Grand Hotel",
        address="1 Main Street",
        city="Springfield",
        state="IL",
        country="USA",
        postal_code="62701",
        owner_id=owner.id,
    )
    db_session.add(venue)
    await db_session.commit()
    return venue


@pytest_asyncio.fixture
async def room(db_session, venue) -> Room:
    room = Room(
        venue_id=venue.id,
        name="Ballroom",
        capacity=200,
        floor=1,
        room_type=RoomType.BALLROOM,
    )
    db_session.add(room)
    await db_session.commit()
    return room


def auth_headers(user: User) -> Dict[str, str]:
    token = create_access_token({"sub": str(user.id), "email": user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
