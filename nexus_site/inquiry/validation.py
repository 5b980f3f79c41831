"""Inquiry validation — sanitizes and checks a whole submission in one pass."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Union

from nexus_site.inquiry.sanitizer import HtmlSanitizer, default_sanitizer
from nexus_site.inquiry.validators import (
    FieldCheck,
    looks_malicious,
    validate_email,
    validate_message,
    validate_name,
    validate_uae_mobile,
)
from nexus_site.messages import DEFAULT_MESSAGES, MessageCatalog
from nexus_site.schemas.inquiry import (
    InquirySubmission,
    SanitizedInquiry,
    ValidationResult,
)


def _has_content(raw: Any) -> bool:
    return isinstance(raw, str) and raw.strip() != ""


class InquiryValidator:
    """Turns a raw submission into a ``ValidationResult``.

    ``name`` and ``message`` are free text and get the markup checks:
    a raw value with angle brackets, or one that sanitizes down to nothing
    although it had visible content, is reported as "invalid characters"
    and its length rules are skipped. ``mobile`` and ``email`` are
    sanitized and validated directly.

    Pure: never raises on bad input and performs no I/O.
    """

    def __init__(
        self,
        messages: MessageCatalog = DEFAULT_MESSAGES,
        sanitizer: HtmlSanitizer = default_sanitizer,
        check_name_charset: bool = False,
    ):
        self.messages = messages
        self.sanitizer = sanitizer
        self.check_name_charset = check_name_charset

    def validate(
        self, raw: Union[InquirySubmission, Mapping[str, Any]]
    ) -> ValidationResult:
        if not isinstance(raw, InquirySubmission):
            raw = InquirySubmission.model_validate(dict(raw or {}))

        errors: dict[str, str] = {}
        sanitized: dict[str, str] = {}
        invalid = self.messages.validation

        sanitized["name"], errors["name"] = self._check_free_text(
            raw.name,
            invalid_characters=invalid.name_invalid_characters,
            validator=lambda value: validate_name(
                value, self.messages, check_charset=self.check_name_charset
            ),
        )

        sanitized["mobile"] = self.sanitizer.sanitize(raw.mobile)
        errors["mobile"] = validate_uae_mobile(sanitized["mobile"], self.messages).error

        sanitized["email"] = self.sanitizer.sanitize(raw.email)
        errors["email"] = validate_email(sanitized["email"], self.messages).error

        sanitized["message"], errors["message"] = self._check_free_text(
            raw.message,
            invalid_characters=invalid.message_invalid_characters,
            validator=lambda value: validate_message(value, self.messages),
        )

        errors = {field: error for field, error in errors.items() if error}
        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            sanitized_data=SanitizedInquiry(**sanitized),
        )

    def _check_free_text(
        self,
        raw: Any,
        invalid_characters: str,
        validator: Callable[[str], FieldCheck],
    ) -> tuple[str, Optional[str]]:
        """Sanitize one free-text field and return (clean value, error)."""
        clean = self.sanitizer.sanitize(raw)

        if looks_malicious(raw):
            return clean, invalid_characters

        # Everything visible was markup
        if clean == "" and _has_content(raw):
            return clean, invalid_characters

        return clean, validator(clean).error


default_validator = InquiryValidator()


def validate_inquiry_data(
    raw: Union[InquirySubmission, Mapping[str, Any]],
    validator: InquiryValidator = default_validator,
) -> ValidationResult:
    """Validate a submission with the default catalog and sanitizer."""
    return validator.validate(raw)
