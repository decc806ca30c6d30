"""Rate limiting configuration using slowapi."""

import re

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from tonswap.core.config import settings

_SECONDS_PER_UNIT = {
    "second": 1,
    "minute": 60,
    "hour": 3600,
    "day": 86400,
}

DEFAULT_RETRY_AFTER = 60


def retry_after_seconds(detail: str) -> int:
    """Derive a Retry-After value from a slowapi limit description.

    slowapi describes limits as ``"5 per 1 minute"``; the window length in
    seconds is what a client has to wait in the worst case.
    """
    match = re.search(r"(\d+)\s+per\s+(\d+)\s+(\w+)", detail)
    if not match:
        return DEFAULT_RETRY_AFTER

    window = int(match.group(2))
    unit = match.group(3).rstrip("s")
    return window * _SECONDS_PER_UNIT.get(unit, 60)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Custom exception handler for rate limit exceeded errors.

    Returns the same ``{"detail": ...}`` shape as application errors plus a
    ``retry_after`` hint, and sets the ``Retry-After`` header.
    """
    retry_after = retry_after_seconds(str(exc.detail))

    response = JSONResponse(
        status_code=429,
        content={
            "detail": f"Rate limit exceeded: {exc.detail}",
            "error_code": "RATE_LIMITED",
            "retry_after": retry_after,
        },
    )
    response.headers["Retry-After"] = str(retry_after)
    return response


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],  # Each endpoint sets its own limit
    enabled=settings.RATE_LIMIT_ENABLED,
    headers_enabled=False,  # routes return models, not Response objects
)
