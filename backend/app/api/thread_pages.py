"""Server-rendered thread pages.

Same operations as the JSON router, answered with templates and redirects.
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from pydantic import ValidationError as PydanticValidationError

from backend.app.errors import ValidationError
from backend.app.models.user import User
from backend.app.schemas.thread import ThreadCreate
from backend.app.services.auth import current_user, require_user
from backend.app.services.reads import threads_with_updates
from backend.app.services.threads import (
    ThreadController,
    ThreadFilters,
    get_thread_controller,
    thread_filters,
)
from backend.app.templating import flash, templates

router = APIRouter(prefix="/threads", tags=["pages"], default_response_class=HTMLResponse)


async def _index(
    request: Request,
    threads: ThreadController,
    user: User | None,
    filters: ThreadFilters,
    page: int,
    channel_slug: str | None = None,
) -> Response:
    channel = await threads.find_channel(channel_slug) if channel_slug else None
    listing = await threads.list(channel=channel, filters=filters, page=page)
    updated = await threads_with_updates(threads.db, user, listing.threads) if user else set()
    return templates.TemplateResponse(
        request,
        "threads/index.html",
        {
            "channel": channel,
            "listing": listing,
            "trending": listing.trending,
            "updated": updated,
            "user": user,
        },
    )


@router.get("")
async def index(
    request: Request,
    page: int = Query(default=1, ge=1),
    filters: ThreadFilters = Depends(thread_filters),
    user: User | None = Depends(current_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Response:
    return await _index(request, threads, user, filters, page)


@router.get("/create")
async def create_form(
    request: Request,
    user: User = Depends(require_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Response:
    return templates.TemplateResponse(
        request,
        "threads/create.html",
        {"channels": await threads.open_channels(), "errors": {}, "old": {}, "user": user},
    )


@router.post("")
async def store(
    request: Request,
    user: User = Depends(require_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Response:
    form = dict(await request.form())
    remote_ip = request.client.host if request.client else None
    try:
        data = ThreadCreate.model_validate(form)
        thread = await threads.create(user, data, remote_ip=remote_ip)
    except PydanticValidationError as e:
        errors = ValidationError.from_pydantic(e).errors
    except ValidationError as e:
        errors = e.errors
    else:
        flash(request, "Your thread has been published")
        return RedirectResponse(thread.path, status_code=303)

    return templates.TemplateResponse(
        request,
        "threads/create.html",
        {
            "channels": await threads.open_channels(),
            "errors": errors,
            "old": form,
            "user": user,
        },
        status_code=422,
    )


@router.get("/{channel}")
async def channel_index(
    channel: str,
    request: Request,
    page: int = Query(default=1, ge=1),
    filters: ThreadFilters = Depends(thread_filters),
    user: User | None = Depends(current_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Response:
    return await _index(request, threads, user, filters, page, channel_slug=channel)


@router.get("/{channel}/{thread_id}")
async def show(
    channel: str,
    thread_id: str,
    request: Request,
    user: User | None = Depends(current_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Response:
    thread = await threads.find_thread(channel, thread_id)
    thread = await threads.show(user, thread)
    return templates.TemplateResponse(
        request, "threads/show.html", {"thread": thread, "user": user}
    )


@router.get("/{channel}/{thread_id}/edit")
async def edit_form(channel: str, thread_id: str) -> Response:
    # Editing happens inline through PATCH /api/threads/{channel}/{thread}.
    return Response(status_code=501)


@router.delete("/{channel}/{thread_id}")
async def destroy(
    channel: str,
    thread_id: str,
    request: Request,
    user: User = Depends(require_user),
    threads: ThreadController = Depends(get_thread_controller),
) -> Response:
    thread = await threads.find_thread(channel, thread_id)
    await threads.destroy(user, thread)
    flash(request, "Your thread was deleted")
    return RedirectResponse("/threads", status_code=303)
