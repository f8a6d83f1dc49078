from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db import Base


class Thread(Base):
    __tablename__ = "threads"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    channel_id: Mapped[str] = mapped_column(String, ForeignKey("channels.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    visits_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[str] = mapped_column(String, nullable=False)
    updated_at: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        Index("idx_threads_listing", "pinned", "created_at"),
        Index("idx_threads_channel", "channel_id"),
    )

    # Many-to-one sides are joined-loaded so they are usable under asyncio
    # without an extra await.
    channel: Mapped[Channel] = relationship("Channel", back_populates="threads", lazy="joined")
    creator: Mapped[User] = relationship("User", back_populates="threads", lazy="joined")

    @property
    def path(self) -> str:
        return f"/threads/{self.channel.slug}/{self.id}"

    @property
    def channel_slug(self) -> str:
        return self.channel.slug

    @property
    def creator_name(self) -> str:
        return self.creator.name


class ThreadRead(Base):
    """Last time a user viewed a thread."""

    __tablename__ = "thread_reads"

    user_id: Mapped[str] = mapped_column(String, ForeignKey("users.id"), primary_key=True)
    thread_id: Mapped[str] = mapped_column(String, ForeignKey("threads.id"), primary_key=True)
    read_at: Mapped[str] = mapped_column(String, nullable=False)
