"""User registration & profile endpoints."""

import secrets
import uuid
from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db import get_db
from backend.app.errors import ConflictError
from backend.app.models.user import User
from backend.app.schemas.user import UserCreate, UserResponse, UserTokenResponse
from backend.app.services.auth import require_user

router = APIRouter(prefix="/users", tags=["users"])


async def register_user(db: AsyncSession, name: str, is_admin: bool = False) -> User:
    """Create a user with a fresh API token. Raises 409 if the name is taken."""
    result = await db.execute(select(User).where(User.name == name))
    if result.scalar_one_or_none():
        raise ConflictError(f"User {name} already exists")

    user = User(
        id=str(uuid.uuid4()),
        name=name,
        api_token=secrets.token_urlsafe(32),
        is_admin=is_admin,
        created_at=datetime.now(UTC).isoformat(),
    )
    db.add(user)
    await db.flush()
    return user


@router.post("", response_model=UserTokenResponse, status_code=201)
async def create_user(data: UserCreate, db: AsyncSession = Depends(get_db)) -> User:
    return await register_user(db, data.name)


@router.get("/me", response_model=UserResponse)
async def get_current_user(user: User = Depends(require_user)) -> User:
    return user
