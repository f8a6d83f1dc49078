"""Direct ThreadController tests, without going through HTTP."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.errors import AuthorizationError, NotFoundError, ValidationError
from backend.app.schemas.thread import ThreadCreate, ThreadUpdate
from backend.app.services.threads import ThreadController, ThreadFilters
from backend.app.services.trending import Trending
from tests.conftest import FakeRecaptcha, create_channel, create_thread, create_user, ts


@pytest.fixture
def controller(db: AsyncSession) -> ThreadController:
    return ThreadController(db=db, trending=Trending(), recaptcha=FakeRecaptcha(), per_page=2)


async def test_list_uses_page_size(db: AsyncSession, controller: ThreadController):
    user = await create_user(db)
    channel = await create_channel(db)
    for i in range(3):
        await create_thread(db, user, channel, title=f"t{i}", created_at=ts(i))

    listing = await controller.list(page=2)
    assert [t.title for t in listing.threads] == ["t0"]
    assert listing.total == 3
    assert listing.last_page == 2


async def test_list_combines_channel_and_filters(db: AsyncSession, controller: ThreadController):
    alice = await create_user(db, name="alice")
    bob = await create_user(db, name="bob")
    general = await create_channel(db, name="General")
    random = await create_channel(db, name="Random")
    await create_thread(db, alice, general, title="alice-general")
    await create_thread(db, bob, general, title="bob-general")
    await create_thread(db, bob, random, title="bob-random")

    listing = await controller.list(channel=general, filters=ThreadFilters(by="bob"))
    assert [t.title for t in listing.threads] == ["bob-general"]


async def test_create_collects_channel_and_recaptcha_errors(
    db: AsyncSession, controller: ThreadController
):
    user = await create_user(db)
    controller.recaptcha.passes = False
    data = ThreadCreate(
        title="Hi", body="There", channel_id="missing", **{"g-recaptcha-response": "tok"}
    )

    with pytest.raises(ValidationError) as exc_info:
        await controller.create(user, data)

    assert set(exc_info.value.errors) == {"channel_id", "g-recaptcha-response"}


async def test_find_channel_missing(controller: ThreadController):
    with pytest.raises(NotFoundError):
        await controller.find_channel("nowhere")


async def test_update_denied_for_non_owner(db: AsyncSession, controller: ThreadController):
    owner = await create_user(db, name="owner")
    other = await create_user(db, name="other")
    channel = await create_channel(db)
    thread = await create_thread(db, owner, channel)

    with pytest.raises(AuthorizationError):
        await controller.update(other, thread, ThreadUpdate(title="x", body="y"))

    with pytest.raises(AuthorizationError):
        await controller.destroy(other, thread)


async def test_show_pushes_trending(db: AsyncSession, controller: ThreadController):
    user = await create_user(db)
    channel = await create_channel(db)
    thread = await create_thread(db, user, channel, title="Seen")

    await controller.show(None, thread)

    assert [e.title for e in controller.trending.get()] == ["Seen"]
    assert thread.visits_count == 1


async def test_update_renames_trending_entry(db: AsyncSession, controller: ThreadController):
    user = await create_user(db)
    channel = await create_channel(db)
    thread = await create_thread(db, user, channel, title="Before")
    await controller.show(None, thread)

    await controller.update(user, thread, ThreadUpdate(title="After", body="Body"))

    entries = controller.trending.get()
    assert [(e.title, e.score) for e in entries] == [("After", 1)]
