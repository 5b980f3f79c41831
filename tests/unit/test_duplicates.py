"""Tests for the same-day duplicate guard."""

from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from nexus_site.inquiry.duplicates import (
    DuplicateGuard,
    day_bounds,
    mask_mobile,
    resolve_timezone,
)
from nexus_site.schemas.inquiry import SanitizedInquiry

from tests.conftest import DUBAI

TODAY_9AM = datetime(2026, 10, 19, 9, 0, tzinfo=DUBAI)


def _inquiry(mobile: str = "0501234567") -> SanitizedInquiry:
    return SanitizedInquiry(
        name="Jo", mobile=mobile, email="a@b.com", message="1234567890"
    )


class TestDayBounds:
    def test_local_midnight_to_midnight(self):
        start, end = day_bounds(datetime(2026, 10, 19, 15, 30, tzinfo=DUBAI))
        assert start == datetime(2026, 10, 19, 0, 0, tzinfo=DUBAI)
        assert end == datetime(2026, 10, 20, 0, 0, tzinfo=DUBAI)

    def test_midnight_belongs_to_its_own_day(self):
        start, end = day_bounds(datetime(2026, 10, 19, 0, 0, tzinfo=DUBAI))
        assert start == datetime(2026, 10, 19, 0, 0, tzinfo=DUBAI)

    def test_dst_change_day(self):
        berlin = ZoneInfo("Europe/Berlin")
        start, end = day_bounds(datetime(2026, 3, 29, 12, 0, tzinfo=berlin))
        assert start == datetime(2026, 3, 29, 0, 0, tzinfo=berlin)
        assert end == datetime(2026, 3, 30, 0, 0, tzinfo=berlin)
        assert start.utcoffset() != end.utcoffset()


class TestDuplicateGuard:
    """A second inquiry is rejected only inside the same local day."""

    @pytest.mark.asyncio
    async def test_same_day_later_is_duplicate(self, store):
        await store.insert(_inquiry(), TODAY_9AM)
        guard = DuplicateGuard(store, DUBAI)

        assert await guard.is_duplicate("0501234567", TODAY_9AM.replace(hour=23))

    @pytest.mark.asyncio
    async def test_previous_day_is_not_duplicate(self, store):
        await store.insert(_inquiry(), TODAY_9AM)
        guard = DuplicateGuard(store, DUBAI)

        yesterday_late = datetime(2026, 10, 18, 23, 59, tzinfo=DUBAI)
        assert not await guard.is_duplicate("0501234567", yesterday_late)

    @pytest.mark.asyncio
    async def test_next_day_is_not_duplicate(self, store):
        await store.insert(_inquiry(), TODAY_9AM)
        guard = DuplicateGuard(store, DUBAI)

        tomorrow_early = datetime(2026, 10, 20, 0, 1, tzinfo=DUBAI)
        assert not await guard.is_duplicate("0501234567", tomorrow_early)

    @pytest.mark.asyncio
    async def test_less_than_24h_but_next_day_is_not_duplicate(self, store):
        await store.insert(_inquiry(), datetime(2026, 10, 19, 23, 50, tzinfo=DUBAI))
        guard = DuplicateGuard(store, DUBAI)

        assert not await guard.is_duplicate(
            "0501234567", datetime(2026, 10, 20, 0, 10, tzinfo=DUBAI)
        )

    @pytest.mark.asyncio
    async def test_other_mobile_is_not_duplicate(self, store):
        await store.insert(_inquiry(), TODAY_9AM)
        guard = DuplicateGuard(store, DUBAI)

        assert not await guard.is_duplicate("0551234567", TODAY_9AM + timedelta(hours=1))

    @pytest.mark.asyncio
    async def test_naive_now_is_read_as_guard_local_time(self, store):
        await store.insert(_inquiry(), TODAY_9AM)
        guard = DuplicateGuard(store, DUBAI)

        assert await guard.is_duplicate("0501234567", datetime(2026, 10, 19, 22, 0))

    @pytest.mark.asyncio
    async def test_now_in_other_zone_is_converted(self, store):
        await store.insert(_inquiry(), TODAY_9AM)
        guard = DuplicateGuard(store, DUBAI)

        # 21:30 UTC on the 19th is 01:30 on the 20th in Dubai
        utc_now = datetime(2026, 10, 19, 21, 30, tzinfo=ZoneInfo("UTC"))
        assert not await guard.is_duplicate("0501234567", utc_now)

    @pytest.mark.asyncio
    async def test_empty_store(self, store):
        guard = DuplicateGuard(store, DUBAI)
        assert not await guard.is_duplicate("0501234567", TODAY_9AM)


class TestHelpers:
    def test_resolve_named_timezone(self):
        assert resolve_timezone("Asia/Dubai") == ZoneInfo("Asia/Dubai")

    def test_resolve_local_timezone(self):
        assert resolve_timezone("") is not None

    def test_mask_mobile(self):
        assert mask_mobile("0501234567") == "*******567"
        assert mask_mobile("12") == "***"
