"""
Rate Limiting Service

Optional per-client rate limiting with slowapi, off by default
(RATE_LIMIT_ENABLED=false). When enabled, SlowAPIMiddleware applies
RATE_LIMIT_DEFAULT to every endpoint and counters live in process memory.

Clients are keyed on the connection address. Proxy headers are only
honoured with RATE_LIMIT_TRUST_PROXY=true, since any caller can send them.
"""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from book_records.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

RETRY_AFTER_SECONDS = 60


def get_client_ip(request: Request) -> str:
    """
    Return the address a request is counted against.

    Args:
        request: FastAPI request object

    Returns:
        The proxy-reported client when proxy headers are trusted,
        otherwise the direct connection address
    """
    if settings.rate_limit_trust_proxy:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            # First entry is the client the proxy saw
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip.strip()

    return get_remote_address(request)


def create_limiter(
    enabled: bool | None = None,
    default_limit: str | None = None,
) -> Limiter:
    """
    Build a fixed-window limiter; arguments default to the settings.

    Returns:
        Configured Limiter instance
    """
    enabled = settings.rate_limit_enabled if enabled is None else enabled
    default_limit = default_limit or settings.rate_limit_default

    limiter = Limiter(
        key_func=get_client_ip,
        default_limits=[default_limit],
        strategy="fixed-window",
        enabled=enabled,
    )
    logger.info(f"Rate limiter enabled: {enabled}, default: {default_limit}")
    return limiter


limiter = create_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Answer 429 with the exceeded limit and a Retry-After header."""
    limit_detail = str(exc.detail)
    logger.warning(f"Rate limit exceeded for {get_client_ip(request)}: {limit_detail}")

    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please slow down.",
            "limit": limit_detail,
        },
        headers={
            "Retry-After": str(RETRY_AFTER_SECONDS),
            "X-RateLimit-Limit": limit_detail,
        },
    )
