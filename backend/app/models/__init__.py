from backend.app.models.user import User
from backend.app.models.channel import Channel
from backend.app.models.thread import Thread, ThreadRead

__all__ = [
    "User",
    "Channel",
    "Thread",
    "ThreadRead",
]
