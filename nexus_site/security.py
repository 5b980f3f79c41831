"""Security headers and per-client form rate limiting."""

from __future__ import annotations

from dataclasses import dataclass

import redis.asyncio as redis
import structlog
from fastapi import Depends, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from nexus_site.config import settings
from nexus_site.errors import RateLimitError
from nexus_site.messages import DEFAULT_MESSAGES
from nexus_site.redis_client import get_redis

logger = structlog.get_logger()

RATE_LIMIT_PREFIX = "ratelimit:form:"

CSP_DIRECTIVES = {
    "default-src": ["'self'"],
    "style-src": [
        "'self'",
        "'unsafe-inline'",
        "https://fonts.googleapis.com",
        "https://cdnjs.cloudflare.com",
    ],
    "script-src": ["'self'", "https://cdnjs.cloudflare.com"],
    "script-src-attr": ["'none'"],
    "font-src": ["'self'", "https://fonts.gstatic.com", "https://cdnjs.cloudflare.com"],
    "img-src": ["'self'", "data:", "https:", "blob:"],
    "connect-src": ["'self'"],
    "frame-src": ["'none'"],
    "object-src": ["'none'"],
    "base-uri": ["'self'"],
    "form-action": ["'self'"],
    "upgrade-insecure-requests": [],
}


def build_csp(directives: dict[str, list[str]]) -> str:
    return "; ".join(
        " ".join([name, *sources]) for name, sources in directives.items()
    )


SECURITY_HEADERS = {
    "Content-Security-Policy": build_csp(CSP_DIRECTIVES),
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds the security headers to every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


def client_ip(request: Request) -> str:
    """Best-effort client address, honouring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


@dataclass
class RateLimitStatus:
    allowed: bool
    count: int
    retry_after: int


class FixedWindowRateLimiter:
    """Counts hits per key in Redis, resetting every ``window_seconds``."""

    def __init__(
        self,
        redis_client: redis.Redis,
        max_hits: int,
        window_seconds: int,
        prefix: str = RATE_LIMIT_PREFIX,
    ):
        self.redis = redis_client
        self.max_hits = max_hits
        self.window_seconds = window_seconds
        self.prefix = prefix

    def _key(self, identity: str) -> str:
        return f"{self.prefix}{identity}"

    async def hit(self, identity: str) -> RateLimitStatus:
        key = self._key(identity)
        count = await self.redis.incr(key)
        if count == 1:
            await self.redis.expire(key, self.window_seconds)
            ttl = self.window_seconds
        else:
            ttl = await self.redis.ttl(key)
            if ttl is None or ttl < 0:
                # Key lost its expiry; start a fresh window
                await self.redis.expire(key, self.window_seconds)
                ttl = self.window_seconds

        return RateLimitStatus(
            allowed=count <= self.max_hits,
            count=count,
            retry_after=ttl,
        )


async def form_rate_limit(
    request: Request,
    redis_client: redis.Redis = Depends(get_redis),
) -> None:
    """Dependency: reject a client that exceeded its form submission budget."""
    limiter = FixedWindowRateLimiter(
        redis_client,
        max_hits=settings.form_rate_limit_max,
        window_seconds=settings.form_rate_limit_window_seconds,
    )
    ip = client_ip(request)
    status = await limiter.hit(ip)

    if not status.allowed:
        logger.warning("form_rate_limited", ip=ip, count=status.count)
        raise RateLimitError(
            DEFAULT_MESSAGES.error.too_many_form_submissions,
            retry_after=status.retry_after,
        )
