"""Per-user read markers for threads."""

from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.models.thread import Thread, ThreadRead
from backend.app.models.user import User


async def mark_read(db: AsyncSession, user: User, thread: Thread) -> ThreadRead:
    """Record that ``user`` has just viewed ``thread``."""
    now = datetime.now(UTC).isoformat()
    marker = await db.get(ThreadRead, (user.id, thread.id))
    if marker is None:
        marker = ThreadRead(user_id=user.id, thread_id=thread.id, read_at=now)
        db.add(marker)
    else:
        marker.read_at = now
    await db.flush()
    return marker


async def threads_with_updates(
    db: AsyncSession, user: User, threads: Sequence[Thread]
) -> set[str]:
    """Ids of ``threads`` changed since ``user`` last read them (or never read)."""
    if not threads:
        return set()

    result = await db.execute(
        select(ThreadRead.thread_id, ThreadRead.read_at).where(
            ThreadRead.user_id == user.id,
            ThreadRead.thread_id.in_([t.id for t in threads]),
        )
    )
    read_at = dict(result.all())
    return {t.id for t in threads if t.id not in read_at or t.updated_at > read_at[t.id]}
