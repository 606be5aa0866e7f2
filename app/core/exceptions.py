"""
Global exception handling for the application.
Every handler-level failure is raised as an AppError subclass and rendered
here into a JSON error envelope; anything else becomes a logged 500.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputException(AppError):
    """Malformed or missing required input."""
    def __init__(self, message: str = "Invalid input", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ConflictException(AppError):
    """Uniqueness violation (duplicate email, duplicate favorite)."""
    def __init__(self, message: str = "Conflict", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class UnauthorizedException(AppError):
    """Missing, invalid or expired credential."""
    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ForbiddenException(AppError):
    """Credential was presented but rejected."""
    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class UpstreamServiceException(AppError):
    """Third-party API failure.

    ``kind`` tells where the call broke:
    - ``response``: upstream answered with an error status (body passed through)
    - ``no_response``: the request was sent but nothing came back
    - ``request_setup``: the request could not be built or sent
    """

    RESPONSE = "response"
    NO_RESPONSE = "no_response"
    REQUEST_SETUP = "request_setup"

    def __init__(
        self,
        message: str = "Upstream service error",
        kind: str = RESPONSE,
        upstream_status: Optional[int] = None,
        upstream_body: Any = None,
    ):
        self.kind = kind
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        details: Dict[str, Any] = {"kind": kind}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        if upstream_body is not None:
            details["upstream_body"] = upstream_body
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


def _error_response(request: Request, status_code: int, code: str, message: str, details: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details,
                "path": request.url.path,
            }
        },
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", error=exc.__class__.__name__, message=exc.message, details=exc.details)
    return _error_response(request, exc.status_code, exc.__class__.__name__, exc.message, exc.details)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """FastAPI body/query validation errors are client input errors (400)."""
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
    return _error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        InvalidInputException.__name__,
        "Invalid or missing request fields",
        {"fields": [f for f in fields if f]},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        return await app_error_handler(request, exc)

    logger.exception("Unexpected error occurred", path=request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "InternalServerError",
                "message": "An unexpected error occurred. Please try again later.",
                "path": request.url.path,
            }
        },
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)
