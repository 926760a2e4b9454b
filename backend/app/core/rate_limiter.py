"""
Rate Limiting for the Research Analysis API
===========================================
Implements rate limiting using slowapi with in-memory storage.

Only the credential endpoints are limited:
- /auth/register, /auth/login: AUTH_RATE_LIMIT per client (brute force protection)

The limiter is created at import time so endpoints can be decorated;
``configure_rate_limiter`` applies the runtime settings when the app is built.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import Settings
from app.core.logging_config import logger


_limits = {
    "auth": "10/minute",
}


def get_client_identifier(request: Request) -> str:
    """Rate limit key: authenticated user if known, otherwise client IP"""
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


def auth_limit() -> str:
    """Current limit string for credential endpoints"""
    return _limits["auth"]


limiter = Limiter(
    key_func=get_client_identifier,
    storage_uri="memory://",
    strategy="fixed-window",
)


def configure_rate_limiter(settings: Settings) -> Limiter:
    """Apply settings to the shared limiter instance"""
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    _limits["auth"] = settings.AUTH_RATE_LIMIT
    limiter.reset()
    return limiter


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Render a rate limit hit in the standard error envelope"""
    logger.warning(
        f"[RateLimit] Exceeded for {get_client_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "error": {
                "code": "RATE_LIMITED",
                "message": "Terlalu banyak permintaan. Coba lagi nanti.",
            }
        },
        headers={"Retry-After": "60"},
    )


def rate_limit_auth():
    """Decorator for credential endpoints"""
    return limiter.limit(auth_limit)
