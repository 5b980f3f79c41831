"""Jinja2 templates and shared page helpers."""

import pathlib
from typing import Optional
from urllib.parse import quote

from fastapi import Request
from fastapi.templating import Jinja2Templates

from nexus_site.config import settings
from nexus_site.messages import DEFAULT_MESSAGES

TEMPLATES_DIR = pathlib.Path(__file__).parent / "templates"
STATIC_DIR = pathlib.Path(__file__).parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["messages"] = DEFAULT_MESSAGES
templates.env.globals["site_name"] = settings.site_name


def is_ajax_request(request: Request) -> bool:
    """True for fetch/XHR callers that expect JSON instead of a page."""
    if request.headers.get("x-requested-with") == "XMLHttpRequest":
        return True
    return "application/json" in request.headers.get("accept", "")


def error_url(status_code: int, message: str) -> str:
    return f"/error?status={status_code}&message={quote(message)}"


def render_error(
    request: Request,
    status_code: int,
    message: str,
    stack: Optional[str] = None,
    error_name: Optional[str] = None,
):
    """Render the error page. ``stack`` is only passed in development."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "error": {
                "status": status_code,
                "message": message,
                "stack": stack,
                "name": error_name,
            },
            "title": f"Error {status_code} | {settings.site_name}",
            "heading": DEFAULT_MESSAGES.status_title(status_code),
            "canonical": "/error",
        },
        status_code=status_code,
    )
