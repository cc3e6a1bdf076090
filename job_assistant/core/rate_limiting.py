"""Rate limiting configuration using slowapi.

Security: Limits how often a client can hit the mutating onboarding and
profile endpoints. Requests are keyed by client address; user ids arrive
in request bodies and are not trusted for keying.

Usage in routers:
    from job_assistant.core.rate_limiting import limiter

    @router.post("/sync")
    @limiter.limit(settings.rate_limit_writes)
    async def sync(request: Request, ...):
        ...
"""

from fastapi import Request, Response
from limits import parse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from job_assistant.core.config import settings

# Global limiter instance
# Configured with in-memory storage (suitable for single-instance deployment)
# For multi-instance, configure Redis storage via RATELIMIT_STORAGE_URL
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
)


def retry_after_seconds(limit: str | None = None) -> int:
    """Seconds a client should wait once a write limit is exhausted.

    Args:
        limit: Rate limit string such as "120/minute"; defaults to
            settings.rate_limit_writes.

    Returns:
        Length of the limit's window in seconds, or 60 when the string
        does not parse.
    """
    try:
        return parse(limit or settings.rate_limit_writes).get_expiry()
    except ValueError:
        return 60


def rate_limit_exceeded_handler(
    _request: Request,
    exc: RateLimitExceeded,
) -> Response:
    """Handle rate limit exceeded errors.

    Returns 429 Too Many Requests with the standard error envelope.

    Args:
        request: The incoming request.
        exc: The rate limit exception.

    Returns:
        JSONResponse with 429 status and retry-after header.
    """
    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "code": "RATE_LIMITED",
                "message": f"Rate limit exceeded: {exc.detail}",
            }
        },
        headers={"Retry-After": str(retry_after_seconds())},
    )
