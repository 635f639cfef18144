"""Centralized exception handlers for the FastAPI application.

Identity exceptions carry a stable error code which is mapped to an HTTP
status in one table. Every error leaves the API in the same envelope.

Error Response Format:
    {
        "status": "error",
        "message": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "data": null,
        "errors": [{"field": "...", "message": "..."}]   # validation only
    }

Usage:
    from eassyevent.presentation.api.exception_handlers import (
        setup_exception_handlers,
    )

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from eassyevent_identity.domain.account import AccountValidationError
from eassyevent_identity.exceptions import ErrorCode, IdentityError

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INCORRECT_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_OR_EXPIRED_TOKEN: status.HTTP_400_BAD_REQUEST,
    ErrorCode.EMAIL_ALREADY_VERIFIED: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized
    ErrorCode.AUTHENTICATION_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.EMAIL_NOT_VERIFIED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.ACCOUNT_DEACTIVATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_INVALID: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 423 Locked
    ErrorCode.ACCOUNT_LOCKED: status.HTTP_423_LOCKED,
    # 429 Too Many Requests
    ErrorCode.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    # 500 Internal Server Error
    ErrorCode.DELIVERY_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    errors: list[dict[str, str]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict[str, Any] = {
        "status": "error",
        "message": message,
        "code": code,
        "data": None,
    }
    if errors:
        content["errors"] = errors

    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {**(headers or {}), "WWW-Authenticate": "Bearer"}

    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _field_name(loc: tuple[Any, ...]) -> str:
    # Drop the request part ("body", "query", ...) from the location
    parts = loc[1:] if len(loc) > 1 else loc
    return ".".join(str(part) for part in parts)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(IdentityError)
    async def identity_exception_handler(
        request: Request,
        exc: IdentityError,
    ) -> JSONResponse:
        """Handle identity exceptions with a structured response."""
        status_code = ERROR_CODE_TO_STATUS.get(
            exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR
        )

        log = logger.error if status_code >= 500 else logger.warning
        log(
            "Identity exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        errors = None
        if isinstance(exc, AccountValidationError) and exc.field:
            errors = [{"field": exc.field, "message": exc.message}]

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            errors=errors,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report request shape errors as 400 with one entry per field."""
        errors = [
            {"field": _field_name(tuple(err.get("loc", ()))), "message": err["msg"]}
            for err in exc.errors()
        ]
        logger.info(
            "Validation failed on %s %s: %s",
            request.method,
            request.url.path,
            errors,
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Validation failed",
            code=ErrorCode.VALIDATION_ERROR.value,
            errors=errors,
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_exception_handler(
        request: Request,
        exc: RateLimitExceeded,
    ) -> JSONResponse:
        """Report an exhausted rate limit as 429 with a Retry-After hint."""
        client = request.client.host if request.client else "unknown"
        logger.warning(
            "Rate limit exceeded by %s on %s %s: %s",
            client,
            request.method,
            request.url.path,
            exc.limit.limit,
        )
        return _create_error_response(
            status_code=ERROR_CODE_TO_STATUS[ErrorCode.RATE_LIMITED],
            message=str(exc.detail),
            code=ErrorCode.RATE_LIMITED.value,
            headers={"Retry-After": str(exc.limit.limit.get_expiry())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        return _create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            code=f"HTTP_{exc.status_code}",
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        The message is never exposed; the traceback is logged.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
