"""
Rate limiting for the refresh endpoints.

Each refresh triggers one LLM call per article, so only those routes are
limited. Uses slowapi keyed on the client IP address.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from .config import config

# Create limiter with IP-based key
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",  # In-memory storage (resets on restart)
    enabled=config.RATE_LIMIT_ENABLED,
)


def refresh_limit() -> str:
    return config.REFRESH_RATE_LIMIT


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Custom handler for rate limit exceeded errors."""
    retry_after = getattr(exc, "retry_after", 60)
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
        headers={"Retry-After": str(retry_after)},
    )


def setup_rate_limiting(app):
    """Attach the limiter and its 429 handler to a FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
