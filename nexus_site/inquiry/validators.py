"""Field validators for the inquiry form.

Validators receive already-sanitized values and return a ``FieldCheck``
carrying at most one message from the catalog. ``looks_malicious`` is the
one check that runs on the raw, pre-sanitization value.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from nexus_site.messages import DEFAULT_MESSAGES, MessageCatalog

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
MESSAGE_MIN_LENGTH = 10
MESSAGE_MAX_LENGTH = 2000
# Column sizes of inquiries.mobile and inquiries.email
MOBILE_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255

# Latin and Arabic letters plus whitespace
NAME_CHARSET_RE = re.compile(r"^[a-zA-Z\s\u0600-\u06FF]+$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MOBILE_STRIP_RE = re.compile(r"[^\d+]", re.ASCII)

UAE_MOBILE_PREFIXES = ("50", "51", "52", "54", "55", "56")

# (lead, total cleaned length), most specific lead first
UAE_MOBILE_SHAPES = (
    ("+971", 13),
    ("971", 12),
    ("0", 10),
    ("", 9),
)

SCRIPT_OPENING = "<script"


@dataclass(frozen=True)
class FieldCheck:
    """Outcome of a single field validator."""

    is_valid: bool
    error: Optional[str] = None


VALID = FieldCheck(is_valid=True)


def _fail(error: str) -> FieldCheck:
    return FieldCheck(is_valid=False, error=error)


def looks_malicious(raw: Any) -> bool:
    """True if the raw value carries markup or a script opening."""
    if not isinstance(raw, str):
        return False
    return SCRIPT_OPENING in raw.lower() or "<" in raw or ">" in raw


def validate_name(
    name: Any,
    messages: MessageCatalog = DEFAULT_MESSAGES,
    check_charset: bool = False,
) -> FieldCheck:
    if not name or not isinstance(name, str):
        return _fail(messages.validation.name_required)

    name = name.strip()
    if len(name) < NAME_MIN_LENGTH:
        return _fail(messages.validation.name_min_length)
    if len(name) > NAME_MAX_LENGTH:
        return _fail(messages.validation.name_max_length)
    if check_charset and not NAME_CHARSET_RE.match(name):
        return _fail(messages.validation.name_letters_only)

    return VALID


def normalize_mobile(mobile: str) -> str:
    """Keep only digits and '+' characters."""
    return MOBILE_STRIP_RE.sub("", mobile).strip()


def validate_uae_mobile(
    mobile: Any,
    messages: MessageCatalog = DEFAULT_MESSAGES,
) -> FieldCheck:
    """Accept the four UAE mobile shapes.

    +971XXNNNNNNN, 971XXNNNNNNN, 0XXNNNNNNN and XXNNNNNNN,
    where XX is one of UAE_MOBILE_PREFIXES.
    """
    if not mobile or not isinstance(mobile, str):
        return _fail(messages.validation.mobile_required)
    if len(mobile) > MOBILE_MAX_LENGTH:
        return _fail(messages.validation.mobile_max_length)

    cleaned = normalize_mobile(mobile)

    # '+' is only allowed as the very first character
    if "+" in cleaned[1:]:
        return _fail(messages.validation.mobile_invalid)

    for lead, length in UAE_MOBILE_SHAPES:
        if cleaned.startswith(lead) and len(cleaned) == length:
            prefix = cleaned[len(lead):len(lead) + 2]
            if prefix in UAE_MOBILE_PREFIXES and cleaned[len(lead):].isdigit():
                return VALID
            break

    return _fail(messages.validation.mobile_invalid)


def validate_email(
    email: Any,
    messages: MessageCatalog = DEFAULT_MESSAGES,
) -> FieldCheck:
    if not email or not isinstance(email, str):
        return _fail(messages.validation.email_required)
    if len(email) > EMAIL_MAX_LENGTH:
        return _fail(messages.validation.email_max_length)

    if not EMAIL_RE.match(email.strip()):
        return _fail(messages.validation.email_invalid)

    return VALID


def validate_message(
    message: Any,
    messages: MessageCatalog = DEFAULT_MESSAGES,
) -> FieldCheck:
    if not message or not isinstance(message, str):
        return _fail(messages.validation.message_required)

    message = message.strip()
    if len(message) < MESSAGE_MIN_LENGTH:
        return _fail(messages.validation.message_min_length)
    if len(message) > MESSAGE_MAX_LENGTH:
        return _fail(messages.validation.message_max_length)

    return VALID
