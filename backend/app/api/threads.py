"""Thread JSON endpoints."""

from fastapi import APIRouter, Depends, Query, Request, Response

from backend.app.models.thread import Thread
from backend.app.models.user import User
from backend.app.schemas.thread import ThreadCreate, ThreadPage, ThreadResponse, ThreadUpdate
from backend.app.services.auth import current_user, require_user
from backend.app.services.threads import (
    ThreadController,
    ThreadFilters,
    ThreadListing,
    get_thread_controller,
    thread_filters,
)

router = APIRouter(prefix="/threads", tags=["threads"])


def _page(listing: ThreadListing) -> dict:
    return {
        "data": listing.threads,
        "current_page": listing.current_page,
        "per_page": listing.per_page,
        "total": listing.total,
        "last_page": listing.last_page,
        "trending": listing.trending,
    }


@router.get("", response_model=ThreadPage)
async def list_threads(
    page: int = Query(default=1, ge=1),
    filters: ThreadFilters = Depends(thread_filters),
    threads: ThreadController = Depends(get_thread_controller),
) -> dict:
    return _page(await threads.list(filters=filters, page=page))


@router.post("", response_model=ThreadResponse, status_code=201)
async def create_thread(
    data: ThreadCreate,
    request: Request,
    user: User = Depends(require_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Thread:
    remote_ip = request.client.host if request.client else None
    return await threads.create(user, data, remote_ip=remote_ip)


@router.get("/{channel}", response_model=ThreadPage)
async def list_channel_threads(
    channel: str,
    page: int = Query(default=1, ge=1),
    filters: ThreadFilters = Depends(thread_filters),
    threads: ThreadController = Depends(get_thread_controller),
) -> dict:
    scope = await threads.find_channel(channel)
    return _page(await threads.list(channel=scope, filters=filters, page=page))


@router.get("/{channel}/{thread_id}", response_model=ThreadResponse)
async def show_thread(
    channel: str,
    thread_id: str,
    user: User | None = Depends(current_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Thread:
    thread = await threads.find_thread(channel, thread_id)
    return await threads.show(user, thread)


@router.patch("/{channel}/{thread_id}", response_model=ThreadResponse)
async def update_thread(
    channel: str,
    thread_id: str,
    data: ThreadUpdate,
    user: User = Depends(require_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Thread:
    thread = await threads.find_thread(channel, thread_id)
    return await threads.update(user, thread, data)


@router.delete("/{channel}/{thread_id}", status_code=204)
async def delete_thread(
    channel: str,
    thread_id: str,
    user: User = Depends(require_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Response:
    thread = await threads.find_thread(channel, thread_id)
    await threads.destroy(user, thread)
    return Response(status_code=204)
