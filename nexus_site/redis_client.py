"""Shared Redis connection backing the form rate limiter.

One client per process, opened on first use and closed by the app lifespan.
Socket and connect timeouts come from ``REDIS_TIMEOUT_SECONDS``.
"""

from typing import Optional

import redis.asyncio as redis

from nexus_site.config import settings

_client: Optional[redis.Redis] = None


def rate_limit_store() -> redis.Redis:
    global _client
    if _client is None:
        _client = redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_timeout=settings.redis_timeout_seconds,
            socket_connect_timeout=settings.redis_timeout_seconds,
        )
    return _client


async def get_redis() -> redis.Redis:
    """FastAPI dependency for the rate limit store."""
    return rate_limit_store()


async def close_redis() -> None:
    """Close the shared client; the next request opens a fresh one."""
    global _client
    if _client is None:
        return
    client, _client = _client, None
    await client.aclose()
