"""Thread controller: list, create, show, update and delete forum threads.

The controller returns ORM objects and plain data; the JSON and HTML routers
decide how to present them.
"""

import logging
import math
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from fastapi import Depends, Query
from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import settings
from backend.app.db import get_db
from backend.app.errors import NotFoundError, ValidationError
from backend.app.models.channel import Channel
from backend.app.models.thread import Thread, ThreadRead
from backend.app.models.user import User
from backend.app.schemas.thread import ThreadCreate, ThreadUpdate
from backend.app.services.auth import authorize_thread_update
from backend.app.services.reads import mark_read
from backend.app.services.recaptcha import RecaptchaVerifier, get_recaptcha
from backend.app.services.trending import Trending, TrendingEntry, get_trending

logger = logging.getLogger(__name__)


@dataclass
class ThreadFilters:
    """Optional predicates applied to the thread listing."""

    by: str | None = None
    popular: bool = False

    def apply(self, query):
        if self.by:
            query = query.join(User, Thread.user_id == User.id).where(User.name == self.by)
        return query

    def order(self, query):
        if self.popular:
            return query.order_by(desc(Thread.visits_count), desc(Thread.created_at))
        # pinned threads first, then newest
        return query.order_by(desc(Thread.pinned), desc(Thread.created_at))


def thread_filters(
    by: str | None = Query(default=None),
    popular: bool = Query(default=False),
) -> ThreadFilters:
    return ThreadFilters(by=by, popular=popular)


@dataclass
class ThreadListing:
    threads: list[Thread]
    current_page: int
    per_page: int
    total: int
    trending: list[TrendingEntry] = field(default_factory=list)

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))


class ThreadController:
    def __init__(
        self,
        db: AsyncSession,
        trending: Trending,
        recaptcha: RecaptchaVerifier,
        per_page: int = settings.threads_per_page,
    ) -> None:
        self.db = db
        self.trending = trending
        self.recaptcha = recaptcha
        self.per_page = per_page

    # --- Lookups ---

    async def find_channel(self, slug: str) -> Channel:
        result = await self.db.execute(select(Channel).where(Channel.slug == slug))
        channel = result.scalar_one_or_none()
        if channel is None:
            raise NotFoundError("Channel not found")
        return channel

    async def find_thread(self, channel_slug: str, thread_id: str) -> Thread:
        """Load a thread, requiring it to live in the channel named by the URL."""
        thread = await self.db.get(Thread, thread_id)
        if thread is None or thread.channel.slug != channel_slug:
            raise NotFoundError("Thread not found")
        return thread

    async def open_channels(self) -> list[Channel]:
        result = await self.db.execute(
            select(Channel).where(Channel.archived.is_(False)).order_by(Channel.name)
        )
        return list(result.scalars().all())

    # --- Operations ---

    async def list(
        self,
        channel: Channel | None = None,
        filters: ThreadFilters | None = None,
        page: int = 1,
    ) -> ThreadListing:
        filters = filters or ThreadFilters()

        query = filters.apply(select(Thread))
        if channel is not None:
            query = query.where(Thread.channel_id == channel.id)

        total = await self.db.scalar(select(func.count()).select_from(query.subquery()))

        query = filters.order(query).limit(self.per_page).offset((page - 1) * self.per_page)
        result = await self.db.execute(query)

        return ThreadListing(
            threads=list(result.scalars().all()),
            current_page=page,
            per_page=self.per_page,
            total=total or 0,
            trending=self.trending.get(),
        )

    async def create(
        self, user: User, data: ThreadCreate, remote_ip: str | None = None
    ) -> Thread:
        errors: dict[str, list[str]] = {}

        if not await self.recaptcha.verify(data.recaptcha, remote_ip):
            errors["g-recaptcha-response"] = ["The recaptcha verification failed. Try again."]

        result = await self.db.execute(
            select(Channel).where(Channel.id == data.channel_id, Channel.archived.is_(False))
        )
        channel = result.scalar_one_or_none()
        if channel is None:
            errors["channel_id"] = ["The selected channel is invalid."]

        if errors:
            raise ValidationError(errors)

        now = datetime.now(UTC).isoformat()
        thread = Thread(
            id=str(uuid.uuid4()),
            title=data.title,
            body=data.body,
            channel_id=channel.id,
            user_id=user.id,
            pinned=False,
            visits_count=0,
            created_at=now,
            updated_at=now,
        )
        thread.channel = channel
        thread.creator = user
        self.db.add(thread)
        await self.db.flush()

        logger.info("Thread %s created in %s by %s", thread.id, channel.slug, user.name)
        return thread

    async def show(self, user: User | None, thread: Thread) -> Thread:
        """Record a view of ``thread``; guests are counted but get no read marker."""
        if user is not None:
            await mark_read(self.db, user, thread)

        self.trending.push(thread)

        await self.db.execute(
            update(Thread)
            .where(Thread.id == thread.id)
            .values(visits_count=Thread.visits_count + 1)
            .execution_options(synchronize_session=False)
        )
        await self.db.refresh(thread, ["visits_count"])
        return thread

    async def update(self, user: User, thread: Thread, data: ThreadUpdate) -> Thread:
        authorize_thread_update(user, thread)

        thread.title = data.title
        thread.body = data.body
        thread.updated_at = datetime.now(UTC).isoformat()
        await self.db.flush()
        self.trending.refresh(thread)

        logger.info("Thread %s updated by %s", thread.id, user.name)
        return thread

    async def destroy(self, user: User, thread: Thread) -> None:
        authorize_thread_update(user, thread)

        await self.db.execute(delete(ThreadRead).where(ThreadRead.thread_id == thread.id))
        await self.db.delete(thread)
        await self.db.flush()
        self.trending.forget(thread.id)

        logger.info("Thread %s deleted by %s", thread.id, user.name)


def get_thread_controller(
    db: AsyncSession = Depends(get_db),
    trending: Trending = Depends(get_trending),
    recaptcha: RecaptchaVerifier = Depends(get_recaptcha),
) -> ThreadController:
    """FastAPI dependency wiring the controller to its collaborators."""
    return ThreadController(db=db, trending=trending, recaptcha=recaptcha)
