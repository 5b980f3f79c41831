"""Inquiry schemas — raw submission, sanitized data and validation result."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

INQUIRY_FIELDS = ("name", "mobile", "email", "message")


class InquirySubmission(BaseModel):
    """Untrusted form body. Values are kept as received, whatever their type."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[Any] = None
    mobile: Optional[Any] = None
    email: Optional[Any] = None
    message: Optional[Any] = None


class SanitizedInquiry(BaseModel):
    """Plain-text copy of a submission, safe to store and echo back."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    mobile: str = ""
    email: str = ""
    message: str = ""


class ValidationResult(BaseModel):
    is_valid: bool
    errors: dict[str, str] = {}  # field -> first failing reason
    sanitized_data: SanitizedInquiry
