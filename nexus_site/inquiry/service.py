"""Inquiry service — validate, deduplicate and store a contact form submission."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Mapping, Optional, Union

import structlog

from nexus_site.errors import DuplicateSubmissionError, InquiryValidationError
from nexus_site.inquiry.duplicates import DuplicateGuard, local_now, mask_mobile
from nexus_site.inquiry.validation import InquiryValidator
from nexus_site.messages import DEFAULT_MESSAGES, MessageCatalog
from nexus_site.models.inquiry import Inquiry
from nexus_site.repositories.inquiry import InquiryStore
from nexus_site.schemas.inquiry import InquirySubmission

logger = structlog.get_logger()


class InquiryService:
    """Runs one submission through validation, the duplicate guard and storage."""

    def __init__(
        self,
        store: InquiryStore,
        tz: tzinfo,
        validator: Optional[InquiryValidator] = None,
        messages: MessageCatalog = DEFAULT_MESSAGES,
    ):
        self.store = store
        self.tz = tz
        self.messages = messages
        self.validator = validator or InquiryValidator(messages=messages)
        self.guard = DuplicateGuard(store, tz)

    async def submit(
        self,
        raw: Union[InquirySubmission, Mapping[str, Any]],
        now: Optional[datetime] = None,
    ) -> Inquiry:
        """Accept a raw submission and return the stored inquiry.

        Args:
            raw: Untrusted form body
            now: Submission time, defaults to the current local time.
                Aware times are converted to the service zone.

        Returns:
            The persisted Inquiry

        Raises:
            InquiryValidationError: a field failed validation
            DuplicateSubmissionError: the mobile already has an inquiry today
        """
        result = self.validator.validate(raw)
        if not result.is_valid:
            logger.info(
                "inquiry_validation_failed",
                fields=sorted(result.errors),
            )
            raise InquiryValidationError(result.errors, result.sanitized_data)

        data = result.sanitized_data
        now = self._local(now)

        if await self.guard.is_duplicate(data.mobile, now):
            raise DuplicateSubmissionError(self.messages.error.rate_limit_exceeded)

        # Only sanitized values reach the store
        try:
            inquiry = await self.store.insert(data, now)
        except DuplicateSubmissionError as e:
            raise DuplicateSubmissionError(self.messages.error.rate_limit_exceeded) from e

        logger.info(
            "inquiry_submitted",
            inquiry_id=str(inquiry.id),
            mobile=mask_mobile(data.mobile),
        )
        return inquiry

    def _local(self, now: Optional[datetime]) -> datetime:
        """Submission time in the service zone; naive times are already local."""
        if now is None:
            return local_now(self.tz)
        if now.tzinfo is None:
            return now.replace(tzinfo=self.tz)
        return now.astimezone(self.tz)

    async def get(self, inquiry_id: str) -> Optional[Inquiry]:
        return await self.store.get(inquiry_id)
