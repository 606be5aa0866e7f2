"""
Middleware configuration for the application.
Correlation IDs, request logging and CORS.
"""

import time
from typing import Callable

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.config import get_settings

logger = structlog.get_logger(__name__)

# Token Guard publishes refreshed Spotify credentials through these
REFRESH_HEADERS = ["x-new-access-token", "x-token-expiration"]

QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with status and timing."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        structlog.contextvars.bind_contextvars(method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Request failed",
                process_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise
        else:
            logger.info(
                "Request completed",
                status_code=response.status_code,
                token_refreshed="x-new-access-token" in response.headers,
                process_time_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            return response
        finally:
            structlog.contextvars.unbind_contextvars("method", "path")


def setup_middleware(app):
    """Setup all middleware for the application.

    Starlette runs middleware last-added-first, so CORS is added last to
    answer preflight requests before anything else.
    """
    settings = get_settings()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=REFRESH_HEADERS + ["X-Request-ID"],
    )
