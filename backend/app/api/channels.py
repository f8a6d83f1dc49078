"""Channel endpoints."""
import re
import uuid
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db import get_db
from backend.app.errors import BadRequestError, ConflictError, NotFoundError, ValidationError
from backend.app.models.channel import Channel
from backend.app.models.user import User
from backend.app.schemas.channel import ChannelCreate, ChannelResponse, ChannelUpdate
from backend.app.services.auth import require_admin

router = APIRouter(prefix="/channels", tags=["channels"])

# Collide with fixed routes under /threads/
RESERVED_SLUGS = frozenset({"create"})


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


async def _get_channel(db: AsyncSession, slug: str) -> Channel:
    result = await db.execute(select(Channel).where(Channel.slug == slug))
    channel = result.scalar_one_or_none()
    if not channel:
        raise NotFoundError("Channel not found")
    return channel


@router.get("", response_model=list[ChannelResponse])
async def list_channels(db: AsyncSession = Depends(get_db)) -> list[Channel]:
    result = await db.execute(select(Channel).order_by(Channel.name))
    return list(result.scalars().all())


@router.post("", response_model=ChannelResponse, status_code=201)
async def create_channel(
    data: ChannelCreate,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> Channel:
    slug = slugify(data.slug or data.name)
    if not slug:
        raise BadRequestError("Channel slug cannot be empty")
    if slug in RESERVED_SLUGS:
        raise ValidationError.for_field("slug", f"The slug {slug} is reserved.")

    # Check uniqueness
    result = await db.execute(
        select(Channel).where(or_(Channel.name == data.name, Channel.slug == slug))
    )
    if result.scalar_one_or_none():
        raise ConflictError(f"Channel {data.name} already exists")

    channel = Channel(
        id=str(uuid.uuid4()),
        name=data.name,
        slug=slug,
        archived=False,
        created_at=datetime.now(UTC).isoformat(),
    )
    db.add(channel)
    await db.flush()
    return channel


@router.get("/{slug}", response_model=ChannelResponse)
async def get_channel(slug: str, db: AsyncSession = Depends(get_db)) -> Channel:
    return await _get_channel(db, slug)


@router.patch("/{slug}", response_model=ChannelResponse)
async def update_channel(
    slug: str,
    data: ChannelUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: User = Depends(require_admin),
) -> Channel:
    channel = await _get_channel(db, slug)
    channel.archived = data.archived
    await db.flush()
    return channel
