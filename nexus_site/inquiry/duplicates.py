"""Same-day duplicate guard — one inquiry per mobile number per calendar day."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

import structlog

from nexus_site.repositories.inquiry import InquiryStore

logger = structlog.get_logger()


def resolve_timezone(name: str = "") -> tzinfo:
    """IANA zone by name, or the server's local zone when ``name`` is empty."""
    if name:
        return ZoneInfo(name)
    return datetime.now().astimezone().tzinfo


def local_now(tz: tzinfo) -> datetime:
    return datetime.now(tz)


def day_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Local midnight of ``now``'s day and of the following day.

    The pair is meant as a half-open ``[start, end)`` range, so a day
    with a DST shift is still exactly one calendar date wide.
    """
    tz = now.tzinfo
    day: date = now.date()
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start, end


def mask_mobile(mobile: str) -> str:
    """Keep the last three digits for logs."""
    if len(mobile) <= 3:
        return "***"
    return "*" * (len(mobile) - 3) + mobile[-3:]


class DuplicateGuard:
    """Rejects a second inquiry from the same mobile on the same local day.

    Must only see mobiles that already passed validation. The lookup and
    the later insert are separate round trips; the store's unique
    (mobile, day) constraint catches the requests that slip between them.
    """

    def __init__(self, store: InquiryStore, tz: Optional[tzinfo] = None):
        self.store = store
        self.tz = tz or resolve_timezone()

    async def is_duplicate(self, mobile: str, now: Optional[datetime] = None) -> bool:
        now = now or local_now(self.tz)
        if now.tzinfo is None:
            now = now.replace(tzinfo=self.tz)

        start, end = day_bounds(now.astimezone(self.tz))
        existing = await self.store.find_one(mobile, start, end)

        if existing is not None:
            logger.info(
                "inquiry_duplicate_rejected",
                mobile=mask_mobile(mobile),
                existing_id=str(existing.id),
            )
            return True
        return False
