"""Application exceptions."""

from __future__ import annotations

from typing import Optional

from nexus_site.messages import DEFAULT_MESSAGES
from nexus_site.schemas.inquiry import SanitizedInquiry


class AppError(Exception):
    """Expected, user-presentable failure with an HTTP status.

    ``message`` is safe to show to visitors. Anything that is not an
    ``AppError`` is treated as a bug and hidden behind a generic page.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status = "fail" if str(status_code).startswith("4") else "error"
        self.is_operational = True


class InquiryValidationError(AppError):
    """One or more inquiry fields failed validation."""

    def __init__(
        self,
        errors: dict[str, str],
        sanitized_data: Optional[SanitizedInquiry] = None,
    ):
        detail = ". ".join(errors.values())
        super().__init__(
            f"{DEFAULT_MESSAGES.error.validation_failed}: {detail}", 400
        )
        self.errors = errors
        self.sanitized_data = sanitized_data


class DuplicateSubmissionError(AppError):
    """The mobile number already has an inquiry for today."""

    def __init__(self, message: str = DEFAULT_MESSAGES.error.rate_limit_exceeded):
        super().__init__(message, 429)


class RateLimitError(AppError):
    """Too many form submissions from one client."""

    def __init__(self, message: str, retry_after: int):
        super().__init__(message, 429)
        self.retry_after = retry_after
