"""Tests for the trending tracker."""

from types import SimpleNamespace

from backend.app.services.trending import Trending


def _thread(id: str, title: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(id=id, title=title or id, path=f"/threads/general/{id}")


def test_push_ranks_by_visits():
    trending = Trending(limit=5)
    trending.push(_thread("a"))
    trending.push(_thread("b"))
    trending.push(_thread("b"))

    assert [e.id for e in trending.get()] == ["b", "a"]
    assert trending.get()[0].score == 2


def test_get_respects_limit():
    trending = Trending(limit=2)
    for i, name in enumerate(["a", "b", "c"]):
        for _ in range(i + 1):
            trending.push(_thread(name))

    assert [e.id for e in trending.get()] == ["c", "b"]


def test_push_refreshes_title():
    trending = Trending()
    trending.push(_thread("a", "Old title"))
    trending.push(_thread("a", "New title"))

    assert trending.get()[0].title == "New title"


def test_forget_and_reset():
    trending = Trending()
    trending.push(_thread("a"))
    trending.push(_thread("b"))

    trending.forget("a")
    assert [e.id for e in trending.get()] == ["b"]

    trending.forget("missing")
    trending.reset()
    assert trending.get() == []


def test_refresh_updates_existing_entry_only():
    trending = Trending()
    trending.push(_thread("a", "Old title"))

    trending.refresh(_thread("a", "Renamed"))
    trending.refresh(_thread("b", "Never visited"))

    entries = trending.get()
    assert [(e.id, e.title, e.score) for e in entries] == [("a", "Renamed", 1)]
