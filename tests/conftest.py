"""Shared fixtures and factory helpers.

Every test gets a fresh in-memory SQLite database. The API under test shares
the test's session through a ``get_db`` override, so rows created with the
factories below are visible to requests without extra commits.
"""

import secrets
import uuid
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import backend.app.models  # noqa: F401 (registers models)
from backend.app.db import Base, get_db
from backend.app.main import app
from backend.app.models.channel import Channel
from backend.app.models.thread import Thread
from backend.app.models.user import User
from backend.app.services.recaptcha import get_recaptcha
from backend.app.services.trending import trending


class FakeRecaptcha:
    """Stand-in verifier that records tokens and answers with ``passes``."""

    def __init__(self) -> None:
        self.passes = True
        self.tokens: list[str] = []

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        self.tokens.append(token)
        return self.passes


@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def recaptcha() -> FakeRecaptcha:
    return FakeRecaptcha()


@pytest.fixture
async def client(db: AsyncSession, recaptcha: FakeRecaptcha) -> AsyncGenerator[AsyncClient, None]:
    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_recaptcha] = lambda: recaptcha
    trending.reset()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    trending.reset()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def _now() -> str:
    return datetime.now(UTC).isoformat()


def auth(user: User) -> dict[str, str]:
    """Request headers authenticating as ``user``."""
    return {"Authorization": f"Bearer {user.api_token}"}


async def create_user(
    db: AsyncSession,
    name: str = "alice",
    is_admin: bool = False,
) -> User:
    user = User(
        id=str(uuid.uuid4()),
        name=name,
        api_token=secrets.token_urlsafe(16),
        is_admin=is_admin,
        created_at=_now(),
    )
    db.add(user)
    await db.flush()
    return user


async def create_channel(
    db: AsyncSession,
    name: str = "General",
    slug: str | None = None,
    archived: bool = False,
) -> Channel:
    channel = Channel(
        id=str(uuid.uuid4()),
        name=name,
        slug=slug or name.lower().replace(" ", "-"),
        archived=archived,
        created_at=_now(),
    )
    db.add(channel)
    await db.flush()
    return channel


async def create_thread(
    db: AsyncSession,
    user: User,
    channel: Channel,
    title: str = "A thread",
    body: str = "Some body text",
    pinned: bool = False,
    created_at: str | None = None,
    visits_count: int = 0,
) -> Thread:
    created_at = created_at or _now()
    thread = Thread(
        id=str(uuid.uuid4()),
        title=title,
        body=body,
        channel_id=channel.id,
        user_id=user.id,
        pinned=pinned,
        visits_count=visits_count,
        created_at=created_at,
        updated_at=created_at,
    )
    thread.channel = channel
    thread.creator = user
    db.add(thread)
    await db.flush()
    return thread


def ts(minutes: int) -> str:
    """A fixed ISO timestamp ``minutes`` after a reference point."""
    return (datetime(2024, 1, 1, tzinfo=UTC) + timedelta(minutes=minutes)).isoformat()
