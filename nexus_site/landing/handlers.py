"""Exception handlers — error pages for browsers, JSON for AJAX callers."""

from __future__ import annotations

import re
import traceback

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nexus_site.config import settings
from nexus_site.errors import AppError, RateLimitError
from nexus_site.landing.templating import error_url, is_ajax_request, render_error
from nexus_site.messages import DEFAULT_MESSAGES

logger = structlog.get_logger()

FILE_EXTENSION_RE = re.compile(r"\.[a-zA-Z0-9]+$")


def _log_context(request: Request) -> dict:
    return {
        "method": request.method,
        "path": request.url.path,
        "user_agent": request.headers.get("user-agent"),
    }


async def app_error_handler(request: Request, exc: AppError):
    """Operational errors: their message is safe to show."""
    logger.warning(
        "app_error",
        status_code=exc.status_code,
        message=exc.message,
        **_log_context(request),
    )

    if isinstance(exc, RateLimitError):
        return JSONResponse(
            status_code=429,
            content={
                "success": False,
                "message": exc.message,
                "retryAfter": exc.retry_after,
            },
            headers={"Retry-After": str(exc.retry_after)},
        )

    if is_ajax_request(request):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message},
        )

    stack = None
    if settings.is_development:
        stack = "".join(traceback.format_exception(exc))
    return render_error(
        request, exc.status_code, exc.message, stack=stack, error_name=type(exc).__name__
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    """Anything unexpected. Details stay in the logs outside development."""
    logger.error("unhandled_error", exc_info=exc, **_log_context(request))

    if settings.is_development:
        message = str(exc) or DEFAULT_MESSAGES.error.generic_error_message
        stack = "".join(traceback.format_exception(exc))
        error_name = type(exc).__name__
    else:
        message = DEFAULT_MESSAGES.error.something_went_wrong
        stack = None
        error_name = None

    if is_ajax_request(request):
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": DEFAULT_MESSAGES.error.server_error},
        )
    return render_error(request, 500, message, stack=stack, error_name=error_name)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        # Missing assets get a bare 404, pages go to the error page
        if FILE_EXTENSION_RE.search(request.url.path):
            return PlainTextResponse(DEFAULT_MESSAGES.error.file_not_found, status_code=404)
        if is_ajax_request(request):
            return JSONResponse(
                status_code=404,
                content={"success": False, "message": DEFAULT_MESSAGES.error.page_not_found},
            )
        return RedirectResponse(
            error_url(404, DEFAULT_MESSAGES.error.page_not_found), status_code=303
        )

    message = exc.detail if isinstance(exc.detail, str) else DEFAULT_MESSAGES.error.generic_error_message
    if is_ajax_request(request):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message},
            headers=getattr(exc, "headers", None),
        )
    return render_error(request, exc.status_code, message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
