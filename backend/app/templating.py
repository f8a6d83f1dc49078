"""Jinja2 template renderer and flash messages for the HTML pages."""

from pathlib import Path
from urllib.parse import urlencode

from fastapi import Request
from fastapi.templating import Jinja2Templates

from backend.app.config import settings

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def flash(request: Request, message: str) -> None:
    """Store a one-shot message shown on the next rendered page."""
    request.session["flash"] = message


def pop_flash(request: Request) -> str | None:
    return request.session.pop("flash", None)


def page_url(request: Request, page: int) -> str:
    """Link to another page of the current listing, keeping its filters."""
    params = [(k, v) for k, v in request.query_params.multi_items() if k != "page"]
    params.append(("page", str(page)))
    return "?" + urlencode(params)


templates.env.globals["pop_flash"] = pop_flash
templates.env.globals["page_url"] = page_url
templates.env.globals["recaptcha_site_key"] = settings.recaptcha_site_key
