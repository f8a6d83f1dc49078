"""Current-user resolution and the thread ownership policy.

A user authenticates with their API token, sent either as
``Authorization: Bearer <token>`` or in the ``threadboard_token`` cookie
(the cookie is what the HTML pages use).
"""

from fastapi import Depends
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.db import get_db
from backend.app.errors import AuthenticationError, AuthorizationError
from backend.app.models.thread import Thread
from backend.app.models.user import User

TOKEN_COOKIE = "threadboard_token"

_bearer = HTTPBearer(auto_error=False)
_cookie = APIKeyCookie(name=TOKEN_COOKIE, auto_error=False)


async def current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    cookie_token: str | None = Depends(_cookie),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Resolve the requesting user, or None for guests."""
    token = credentials.credentials if credentials else cookie_token
    if not token:
        return None
    result = await db.execute(select(User).where(User.api_token == token))
    return result.scalar_one_or_none()


async def require_user(user: User | None = Depends(current_user)) -> User:
    if user is None:
        raise AuthenticationError()
    return user


def can_update_thread(user: User, thread: Thread) -> bool:
    return user.is_admin or thread.user_id == user.id


def authorize_thread_update(user: User, thread: Thread) -> None:
    """Raise AuthorizationError unless ``user`` may modify ``thread``."""
    if not can_update_thread(user, thread):
        raise AuthorizationError()


async def require_admin(user: User = Depends(require_user)) -> User:
    if not user.is_admin:
        raise AuthorizationError()
    return user
