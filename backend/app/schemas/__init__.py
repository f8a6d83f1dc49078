from backend.app.schemas.channel import ChannelCreate, ChannelResponse, ChannelUpdate
from backend.app.schemas.thread import (
    ThreadCreate,
    ThreadPage,
    ThreadResponse,
    ThreadUpdate,
    TrendingResponse,
)
from backend.app.schemas.user import UserCreate, UserResponse, UserTokenResponse

__all__ = [
    "UserCreate",
    "UserResponse",
    "UserTokenResponse",
    "ChannelCreate",
    "ChannelUpdate",
    "ChannelResponse",
    "ThreadCreate",
    "ThreadUpdate",
    "ThreadResponse",
    "ThreadPage",
    "TrendingResponse",
]
