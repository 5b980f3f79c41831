"""Inquiry repository — persistence for accepted contact form submissions."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Union

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nexus_site.errors import DuplicateSubmissionError
from nexus_site.models.inquiry import Inquiry
from nexus_site.schemas.inquiry import SanitizedInquiry

logger = structlog.get_logger()


class InquiryStore(ABC):
    """What the inquiry pipeline needs from storage."""

    @abstractmethod
    async def find_one(
        self, mobile: str, start: datetime, end: datetime
    ) -> Optional[Inquiry]:
        """Return an inquiry for ``mobile`` created in ``[start, end)``, if any."""
        ...

    @abstractmethod
    async def insert(self, data: SanitizedInquiry, now: datetime) -> Inquiry:
        """Persist a new unread inquiry created at ``now``.

        Raises:
            DuplicateSubmissionError: the store already holds an inquiry
                for this mobile on ``now``'s calendar day.
        """
        ...

    @abstractmethod
    async def get(self, inquiry_id: Union[str, uuid.UUID]) -> Optional[Inquiry]:
        ...


class InquiryRepository(InquiryStore):
    """SQLAlchemy-backed inquiry store."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_one(
        self, mobile: str, start: datetime, end: datetime
    ) -> Optional[Inquiry]:
        stmt = (
            select(Inquiry)
            .where(
                Inquiry.mobile == mobile,
                Inquiry.created_at >= start,
                Inquiry.created_at < end,
            )
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def insert(self, data: SanitizedInquiry, now: datetime) -> Inquiry:
        inquiry = Inquiry(
            name=data.name,
            mobile=data.mobile,
            email=data.email,
            message=data.message,
            is_read=False,
            created_at=now,
            updated_at=now,
            created_day=now.date(),
        )
        self.db.add(inquiry)

        try:
            await self.db.commit()
        except IntegrityError as e:
            # A concurrent request for the same mobile won the race
            await self.db.rollback()
            logger.warning("inquiry_duplicate_on_insert", error=str(e.orig))
            raise DuplicateSubmissionError() from e

        logger.info("inquiry_created", inquiry_id=str(inquiry.id))
        return inquiry

    async def get(self, inquiry_id: Union[str, uuid.UUID]) -> Optional[Inquiry]:
        """Load an inquiry by id; malformed ids resolve to None."""
        if not isinstance(inquiry_id, uuid.UUID):
            try:
                inquiry_id = uuid.UUID(str(inquiry_id))
            except ValueError:
                return None

        result = await self.db.execute(select(Inquiry).where(Inquiry.id == inquiry_id))
        return result.scalar_one_or_none()
