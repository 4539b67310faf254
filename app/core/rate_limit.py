from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.core.config import settings


def client_ip(request: Request) -> str:
    """First hop of X-Forwarded-For when behind a proxy, else the socket peer."""
    forwarded_for = request.headers.get("x-forwarded-for", "").strip()
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return get_remote_address(request) or "unknown"


limiter = Limiter(key_func=client_ip, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Per-route limit, defaulting to RATE_LIMIT; a no-op when limiting is off."""
    if not settings.rate_limit_enabled:
        return lambda func: func
    return limiter.limit(limit or settings.rate_limit)
