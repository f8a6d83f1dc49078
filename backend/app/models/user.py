from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    api_token: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Timestamps are stored as ISO 8601 strings (not datetime columns) throughout
    # the schema. They compare correctly as text as long as every writer uses
    # datetime.now(UTC).isoformat().
    created_at: Mapped[str] = mapped_column(String, nullable=False)

    # Relationships
    threads: Mapped[list[Thread]] = relationship("Thread", back_populates="creator")
