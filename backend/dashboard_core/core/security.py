"""
Security headers and startup checks.

The service only returns JSON, so the content security policy denies
everything by default.
"""
import os
import logging
from typing import Optional
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)


DEFAULT_CSP = {
    "default-src": "'none'",
    "frame-ancestors": "'none'",
    "base-uri": "'none'",
    "form-action": "'none'",
}


def build_csp_header(csp_dict: dict) -> str:
    """Build CSP header string from dictionary."""
    return "; ".join(f"{key} {value}" for key, value in csp_dict.items())


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.

    Adds:
    - Content-Security-Policy
    - X-Content-Type-Options
    - X-Frame-Options
    - Referrer-Policy
    - Cache-Control (suggestions are computed per request)
    """

    def __init__(self, app, csp_overrides: Optional[dict] = None):
        super().__init__(app)
        csp = DEFAULT_CSP.copy()
        if csp_overrides:
            csp.update(csp_overrides)
        self.csp_header = build_csp_header(csp)

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["Content-Security-Policy"] = self.csp_header
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers.setdefault("Cache-Control", "no-store")

        return response


def validate_production_security(allowed_origins: list) -> None:
    """
    Warn about permissive settings when ENVIRONMENT is production.

    Wildcard or localhost CORS origins are allowed in development but
    logged as warnings in production.
    """
    env = os.getenv('ENVIRONMENT', 'development').lower()

    if env not in ('production', 'prod'):
        logger.info(f"Running in {env} mode - security validation skipped")
        return

    if "*" in allowed_origins:
        logger.warning(
            "ALLOWED_ORIGINS is '*' in production. "
            "Consider listing the dashboard origins explicitly."
        )
    if any('localhost' in origin for origin in allowed_origins):
        logger.warning(
            "ALLOWED_ORIGINS contains 'localhost' in production. "
            "Consider removing for security."
        )

    logger.info("Production security validation passed")
