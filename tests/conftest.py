"""Test fixtures and configuration."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("ENVIRONMENT", "test")

import uuid
from datetime import datetime
from typing import Optional
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from nexus_site.errors import DuplicateSubmissionError
from nexus_site.inquiry.service import InquiryService
from nexus_site.models import Base, Inquiry
from nexus_site.repositories.inquiry import InquiryStore
from nexus_site.schemas.inquiry import SanitizedInquiry

# No DST, so day boundaries are stable all year
DUBAI = ZoneInfo("Asia/Dubai")


class InMemoryInquiryStore(InquiryStore):
    """Inquiry store backed by a list, with the same per-day uniqueness rule."""

    def __init__(self):
        self.records: list[Inquiry] = []

    async def find_one(self, mobile, start, end) -> Optional[Inquiry]:
        for record in self.records:
            if record.mobile == mobile and start <= record.created_at < end:
                return record
        return None

    async def insert(self, data: SanitizedInquiry, now: datetime) -> Inquiry:
        for record in self.records:
            if record.mobile == data.mobile and record.created_day == now.date():
                raise DuplicateSubmissionError()

        inquiry = Inquiry(
            id=uuid.uuid4(),
            name=data.name,
            mobile=data.mobile,
            email=data.email,
            message=data.message,
            is_read=False,
            created_at=now,
            updated_at=now,
            created_day=now.date(),
        )
        self.records.append(inquiry)
        return inquiry

    async def get(self, inquiry_id) -> Optional[Inquiry]:
        for record in self.records:
            if str(record.id) == str(inquiry_id):
                return record
        return None


@pytest.fixture
def store():
    """Empty in-memory inquiry store."""
    return InMemoryInquiryStore()


@pytest.fixture
def service(store):
    """InquiryService over the in-memory store, in Dubai time."""
    return InquiryService(store, tz=DUBAI)


@pytest.fixture
def valid_submission():
    return {
        "name": "Jo",
        "mobile": "0501234567",
        "email": "a@b.com",
        "message": "1234567890",
    }


@pytest.fixture
def mock_redis():
    """Mock Redis client for the rate limiter."""
    redis = AsyncMock()
    redis.incr = AsyncMock(return_value=1)
    redis.expire = AsyncMock(return_value=True)
    redis.ttl = AsyncMock(return_value=900)
    return redis


@pytest_asyncio.fixture
async def db_session():
    """Fresh in-memory SQLite database with the schema created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()
