"""
Pytest fixtures for test database, client, and notification capture.

Each test gets a fresh engine with tables created and dropped around it.
TEST_DATABASE_URL may point at PostgreSQL; the default is in-memory SQLite.
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from booking_api.main import app
from booking_api.db.base import Base
from booking_api.db.session import get_db
from booking_api.api.dependencies import get_notification_sender
from booking_api.models.booking import Booking
from booking_api.services.interfaces.notification import NotificationSender

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

VALID_CONTACT = {"name": "Asha Verma", "email": "asha@example.com", "phone": "9876543210"}
VALID_DRIVER = {"name": "Ravi Kumar", "phone": "1234567890", "photo": "https://cdn.example.com/ravi.jpg"}


class RecordingSender(NotificationSender):
    """Collects notifications instead of sending them."""

    def __init__(self):
        self.sent = []

    async def notify(self, contact, outcome):
        self.sent.append((contact, outcome))


class FailingSender(NotificationSender):
    async def notify(self, contact, outcome):
        raise RuntimeError("SMS gateway unreachable")


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def notifications() -> RecordingSender:
    return RecordingSender()


@pytest_asyncio.fixture(scope="function")
async def client(
    db_session: AsyncSession,
    notifications: RecordingSender,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the DB session and notification sender overridden."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notification_sender] = lambda: notifications

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def pending_booking(db_session: AsyncSession) -> Booking:
    """A Pending booking with a two-stop route."""
    booking = Booking(
        service_type="Cab",
        sub_service_type="Outstation",
        source_city="Pune",
        route=[{"pickup": "Pune", "drop": "Lonavala"}, {"pickup": "Lonavala", "drop": "Mumbai"}],
        distance=150.0,
        contact_name=VALID_CONTACT["name"],
        contact_email=VALID_CONTACT["email"],
        contact_phone=VALID_CONTACT["phone"],
    )
    db_session.add(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking
