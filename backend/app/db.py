from collections.abc import AsyncGenerator
from datetime import UTC

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from backend.app.config import DATA_DIR, DATABASE_URL


class Base(DeclarativeBase):
    pass


engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create all tables and apply pragmas."""
    import backend.app.models  # noqa: F401 (registers models)

    DATA_DIR.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        # SQLite performance & safety pragmas
        await conn.execute(text("PRAGMA journal_mode = WAL"))
        await conn.execute(text("PRAGMA synchronous = NORMAL"))
        await conn.execute(text("PRAGMA foreign_keys = ON"))
        await conn.execute(text("PRAGMA busy_timeout = 5000"))

        await conn.run_sync(Base.metadata.create_all)

    await _seed_defaults()


async def _seed_defaults() -> None:
    """Create the default channels on an empty database."""
    import uuid
    from datetime import datetime

    from sqlalchemy import select

    from backend.app.models.channel import Channel

    async with async_session() as session:
        existing = await session.execute(select(Channel).limit(1))
        if existing.scalar_one_or_none() is not None:
            return

        now = datetime.now(UTC).isoformat()
        for name in ("General", "Announcements"):
            session.add(
                Channel(
                    id=str(uuid.uuid4()),
                    name=name,
                    slug=name.lower(),
                    archived=False,
                    created_at=now,
                )
            )
        await session.commit()
