"""
Per-IP rate limiting with slowapi.
"""
import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from dashboard_core.core.config import get_settings
from dashboard_core.core.errors import ErrorCodes, error_body

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)


def suggest_rate_limit() -> str:
    """Limit string for the suggestion endpoint, read from settings on each hit."""
    return f"{get_settings().rate_limit_per_minute}/minute"


def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded with the standard failure envelope."""
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)}: {exc.detail}")
    return JSONResponse(
        status_code=429,
        content=error_body(ErrorCodes.RATE_LIMIT_EXCEEDED, correlation_id),
        headers={"Retry-After": "60", "X-Correlation-ID": correlation_id}
    )
