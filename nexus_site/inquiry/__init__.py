"""Inquiry intake: sanitization, validation, duplicate guard and service."""

from nexus_site.inquiry.duplicates import DuplicateGuard, day_bounds
from nexus_site.inquiry.sanitizer import HtmlSanitizer, sanitize_input
from nexus_site.inquiry.validation import InquiryValidator, validate_inquiry_data
from nexus_site.inquiry.validators import (
    FieldCheck,
    looks_malicious,
    validate_email,
    validate_message,
    validate_name,
    validate_uae_mobile,
)

__all__ = [
    "DuplicateGuard",
    "day_bounds",
    "HtmlSanitizer",
    "sanitize_input",
    "InquiryValidator",
    "validate_inquiry_data",
    "FieldCheck",
    "looks_malicious",
    "validate_email",
    "validate_message",
    "validate_name",
    "validate_uae_mobile",
]
