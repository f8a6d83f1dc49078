"""Ranked list of the most visited threads.

Scores live in process memory and reset on restart.
"""

from dataclasses import dataclass

from backend.app.config import settings
from backend.app.models.thread import Thread


@dataclass
class TrendingEntry:
    id: str
    title: str
    path: str
    score: int = 0


class Trending:
    def __init__(self, limit: int = 5) -> None:
        self.limit = limit
        self._entries: dict[str, TrendingEntry] = {}

    def push(self, thread: Thread, increment: int = 1) -> None:
        entry = self._entries.get(thread.id)
        if entry is None:
            entry = TrendingEntry(id=thread.id, title=thread.title, path=thread.path)
            self._entries[thread.id] = entry
        else:
            entry.title = thread.title
            entry.path = thread.path
        entry.score += increment

    def refresh(self, thread: Thread) -> None:
        """Update the title/path of an existing entry without scoring a visit."""
        entry = self._entries.get(thread.id)
        if entry is not None:
            entry.title = thread.title
            entry.path = thread.path

    def get(self) -> list[TrendingEntry]:
        # Ties keep insertion order (sorted is stable).
        ranked = sorted(self._entries.values(), key=lambda e: e.score, reverse=True)
        return ranked[: self.limit]

    def forget(self, thread_id: str) -> None:
        self._entries.pop(thread_id, None)

    def reset(self) -> None:
        self._entries.clear()


trending = Trending(limit=settings.trending_limit)


def get_trending() -> Trending:
    """FastAPI dependency for the trending tracker."""
    return trending
