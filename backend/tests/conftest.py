"""
Pytest fixtures for the test database, HTTP client, and authentication.

SQLite (aiosqlite) on a single shared in-memory connection stands in for
PostgreSQL; every test gets fresh tables and a fresh car lock.
"""

import asyncio
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from train_booking.main import app
from train_booking.api.deps import get_car_lock
from train_booking.db.base import Base
from train_booking.db.session import get_db
from train_booking.core.security import create_access_token, hash_password
from train_booking.models import User
from train_booking.models.seat import SeatState, initial_state
from train_booking.services.booking_service import book

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ALICE = "alice@example.com"
BOB = "bob@example.com"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop everything with the engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the test session and a per-test car lock."""

    async def override_get_db():
        yield db_session

    lock = asyncio.Lock()
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_car_lock] = lambda: lock

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    user = User(email=ALICE, hashed_password=hash_password("testpassword123"))
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers() -> dict:
    """Bearer headers for alice."""
    return {"Authorization": f"Bearer {create_access_token(data={'sub': ALICE})}"}


@pytest.fixture
def other_headers() -> dict:
    """Bearer headers for bob."""
    return {"Authorization": f"Bearer {create_access_token(data={'sub': BOB})}"}


@pytest.fixture
def fresh_car() -> SeatState:
    return initial_state()


@pytest.fixture
def first_row_full() -> SeatState:
    """Seats 1-7 (row 1) booked by alice."""
    return book(initial_state(), range(1, 8), ALICE)
