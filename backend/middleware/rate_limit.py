"""
Rate Limiting Middleware for FastAPI

This module provides rate limiting functionality using slowapi (compatible with Flask-Limiter).
Limits are tracked per client IP address; the service has no authentication.

Rate Limit Tiers (configurable through the environment):
- Chat endpoint: RATE_LIMIT_CHAT_PER_MINUTE requests/minute per client (default 30)
- Contact endpoint: RATE_LIMIT_CONTACT_PER_HOUR requests/hour per client (default 10)
- Health and services: No limits (for monitoring)

Usage:
    from backend.middleware.rate_limit import build_limiter, rate_limit_exceeded_handler

    limiter = build_limiter()
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.post("/chat")
    @limiter.limit("30/minute")
    def chat(request: Request, payload: ChatRequest):
        ...
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60


def get_rate_limit_key(request: Request) -> str:
    """
    Generate a rate limit key from the client address.

    Client-supplied forwarding headers are ignored; behind a reverse proxy run uvicorn with
    --proxy-headers and --forwarded-allow-ips so the socket address is the real client.

    Args:
        request: FastAPI request object

    Returns:
        Rate limit key (client IP address)
    """
    return get_remote_address(request)


def build_limiter() -> Limiter:
    """
    Create a limiter with in-memory storage.

    Each application instance gets its own limiter so counters are not shared between apps.
    """
    return Limiter(
        key_func=get_rate_limit_key,
        default_limits=[],  # No default limits; specify per-endpoint
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Custom handler for rate limit exceeded responses.

    Args:
        request: FastAPI request object
        exc: RateLimitExceeded exception

    Returns:
        JSONResponse with 429 status code
    """
    logger.warning(
        f"Rate limit exceeded for {request.method} {request.url.path} "
        f"from {request.client.host if request.client else 'unknown'}"
    )

    retry_after = getattr(exc, "retry_after", DEFAULT_RETRY_AFTER_SECONDS)
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "retry_after": retry_after,
        },
        headers={"Retry-After": str(retry_after)},
    )


__all__ = [
    "build_limiter",
    "get_rate_limit_key",
    "rate_limit_exceeded_handler",
]
