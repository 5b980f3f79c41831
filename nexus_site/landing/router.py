"""Marketing pages and the inquiry form endpoint."""

from __future__ import annotations

import json
from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nexus_site.config import settings
from nexus_site.database import get_db
from nexus_site.errors import AppError, DuplicateSubmissionError, InquiryValidationError
from nexus_site.inquiry.duplicates import resolve_timezone
from nexus_site.inquiry.service import InquiryService
from nexus_site.inquiry.validation import InquiryValidator
from nexus_site.landing.templating import error_url, is_ajax_request, templates
from nexus_site.messages import DEFAULT_MESSAGES
from nexus_site.repositories.inquiry import InquiryRepository
from nexus_site.security import form_rate_limit

logger = structlog.get_logger()

router = APIRouter()

HOME_TITLE = "Corporate Gifts and Promotional Products | Nexus Plater UAE"
HOME_DESCRIPTION = (
    "Nexus Plater provides high-quality corporate gifts and promotional products "
    "in UAE with fast turnaround and competitive pricing. Custom branded "
    "merchandise, employee gifts, and promotional items."
)
SUCCESS_TITLE = "Success - Inquiry Submitted | Nexus Plater"
SUCCESS_DESCRIPTION = (
    "Your inquiry has been successfully submitted. Thank you for contacting "
    "Nexus Plater for your corporate gifts and promotional products needs."
)


def get_inquiry_service(db: AsyncSession = Depends(get_db)) -> InquiryService:
    return InquiryService(
        InquiryRepository(db),
        tz=resolve_timezone(settings.timezone),
        validator=InquiryValidator(
            messages=DEFAULT_MESSAGES,
            check_name_charset=settings.inquiry_name_charset_check,
        ),
    )


async def read_submission(request: Request) -> dict[str, Any]:
    """Form body as a plain dict; accepts urlencoded, multipart and JSON."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise AppError(DEFAULT_MESSAGES.error.bad_request_title, 400) from e
        return body if isinstance(body, dict) else {}

    form = await request.form()
    return dict(form)


@router.get("/", response_class=HTMLResponse)
async def landing_page(request: Request):
    """Serve the home page with the inquiry form."""
    return templates.TemplateResponse(
        request,
        "home.html",
        {"title": HOME_TITLE, "description": HOME_DESCRIPTION, "canonical": "/"},
    )


@router.get("/home", response_class=HTMLResponse)
async def home_page(request: Request):
    return templates.TemplateResponse(
        request,
        "home.html",
        {"title": HOME_TITLE, "description": HOME_DESCRIPTION, "canonical": "/home"},
    )


@router.get("/success", response_class=HTMLResponse)
async def success_page(
    request: Request,
    inquiry_id: Optional[str] = Query(None, alias="id"),
    service: InquiryService = Depends(get_inquiry_service),
):
    """Thank-you page, echoing the stored inquiry when the id resolves."""
    inquiry = None
    if inquiry_id:
        try:
            inquiry = await service.get(inquiry_id)
        except SQLAlchemyError as e:
            raise AppError(DEFAULT_MESSAGES.error.unable_to_load_inquiry, 500) from e

    return templates.TemplateResponse(
        request,
        "success.html",
        {
            "inquiry": inquiry,
            "title": SUCCESS_TITLE,
            "description": SUCCESS_DESCRIPTION,
            "canonical": "/success",
        },
    )


@router.get("/error", response_class=HTMLResponse)
async def error_page(
    request: Request,
    status: Optional[str] = Query(None),
    message: Optional[str] = Query(None),
):
    try:
        status_code = int(status) if status else 500
    except ValueError:
        status_code = 500
    if not 400 <= status_code <= 599:
        status_code = 500

    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "error": {
                "status": status_code,
                "message": message or DEFAULT_MESSAGES.error.generic_error_message,
            },
            "title": f"Error {status_code} | {settings.site_name}",
            "heading": DEFAULT_MESSAGES.status_title(status_code),
            "canonical": "/error",
        },
        status_code=status_code,
    )


@router.post("/submitInquiry", dependencies=[Depends(form_rate_limit)])
async def submit_inquiry(
    request: Request,
    service: InquiryService = Depends(get_inquiry_service),
):
    """Validate and store a contact form submission."""
    raw = await read_submission(request)
    ajax = is_ajax_request(request)

    try:
        inquiry = await service.submit(raw)
    except InquiryValidationError as e:
        if not ajax:
            raise
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "message": DEFAULT_MESSAGES.error.validation_failed,
                "errors": e.errors,
            },
        )
    except DuplicateSubmissionError as e:
        redirect_url = error_url(429, e.message)
        if ajax:
            return JSONResponse(
                status_code=429,
                content={"success": False, "message": e.message, "redirectUrl": redirect_url},
            )
        return RedirectResponse(redirect_url, status_code=303)

    redirect_url = f"/success?id={inquiry.id}"
    if ajax:
        return JSONResponse(
            status_code=201,
            content={
                "success": True,
                "message": DEFAULT_MESSAGES.success.inquiry_submitted,
                "redirectUrl": redirect_url,
                "inquiryId": str(inquiry.id),
            },
        )
    return RedirectResponse(redirect_url, status_code=303)
