"""Shared fixtures: in-memory database, client accounts, API client."""

import os

# Settings are read at import time, so the environment comes first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CLIENT_URL", "https://clients.example.com")
os.environ.setdefault("PROJECT_NAME", "Task Desk API")

from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskdesk.db.database import Base, get_db
from taskdesk.models import Client
from taskdesk.utils.email import EmailSender


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory SQLite database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client_account(db_session) -> Client:
    """The client account with id 7 that requests a password reminder."""
    client = Client(id=7, name="Acme Ltd", email="user@example.com")
    db_session.add(client)
    await db_session.commit()
    await db_session.refresh(client)
    return client


@pytest.fixture
def email_sender():
    """Notification dispatcher double recording every email."""
    return MagicMock(spec=EmailSender)


@pytest_asyncio.fixture
async def api_client(session_factory, email_sender):
    """HTTP client bound to the app, wired to the test database and sender."""
    from taskdesk.api.deps import get_email_sender
    from taskdesk.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
