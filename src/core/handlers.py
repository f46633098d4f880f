from __future__ import annotations

"""
Global exception handlers for the FastAPI application.

This module contains centralized handlers for custom application exceptions,
translating them into the ``{"error": {"message": ...}}`` response envelope.
"""

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from src.core.exceptions import (
    AuthenticationError,
    AuthGateError,
    ConflictError,
    InternalServerError,
    NotFoundError,
    PasswordPolicyError,
    PasswordResetError,
    RateLimitError,
    ValidationError,
)

__all__ = [
    "error_body",
    "validation_error_handler",
    "password_policy_error_handler",
    "conflict_error_handler",
    "authentication_error_handler",
    "not_found_error_handler",
    "password_reset_error_handler",
    "rate_limit_error_response",
    "rate_limit_error_handler",
    "internal_server_error_handler",
    "authgate_error_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)


def error_body(message: str, **extra: Any) -> Dict[str, Any]:
    """Build the standard error envelope."""
    return {"error": {"message": message, **extra}}


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handles `ValidationError`, returning a `400 Bad Request` with field details.

    Args:
        request: The incoming `Request` object.
        exc: The `ValidationError` instance.

    Returns:
        A `JSONResponse` with a 400 status code and per-field messages.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(exc.message, details=exc.details),
    )


async def password_policy_error_handler(request: Request, exc: PasswordPolicyError) -> JSONResponse:
    """Handles `PasswordPolicyError`, returning a `400 Bad Request`.

    The details list every rule the password violates, not only the first.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(exc.message, details=exc.violations),
    )


async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """Handles `ConflictError`, returning a `409 Conflict`."""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_body(exc.message),
    )


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """Handles `AuthenticationError`, returning a `401 Unauthorized`.

    Args:
        request: The incoming `Request` object.
        exc: The `AuthenticationError` instance.

    Returns:
        A `JSONResponse` with a 401 status code and a generic message.
    """
    logger.warning(
        "Authentication failure",
        error=exc.code,
        client_ip=_client_ip(request),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=error_body(exc.message),
    )


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handles `NotFoundError`, returning a `404 Not Found`."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_body(exc.message),
    )


async def password_reset_error_handler(request: Request, exc: PasswordResetError) -> JSONResponse:
    """Handles `PasswordResetError`, returning a `400 Bad Request`.

    Covers unknown, already used and expired reset tokens.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(exc.message),
    )


def rate_limit_error_response(request: Request, exc: RateLimitError) -> JSONResponse:
    """Render a throttling rejection as a `429 Too Many Requests`.

    The body carries the machine-readable ``code`` (``RATE_LIMIT_EXCEEDED`` or
    ``LOGIN_DELAY``) and ``retryAfter`` in seconds; quota and ``Retry-After``
    headers travel on the response.
    """
    logger.warning(
        "Request throttled",
        code=exc.code,
        retry_after=exc.retry_after,
        client_ip=_client_ip(request),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content=error_body(exc.message, code=exc.code, retryAfter=exc.retry_after),
        headers=exc.headers,
    )


async def rate_limit_error_handler(request: Request, exc: RateLimitError) -> JSONResponse:
    """Handles `RateLimitError` raised anywhere below the routes."""
    return rate_limit_error_response(request, exc)


async def internal_server_error_handler(request: Request, exc: InternalServerError) -> JSONResponse:
    """Handles `InternalServerError`, returning a `500` with its fixed message.

    The chained cause is logged here and never sent to the client.
    """
    cause = exc.__cause__
    logger.error(
        "Request failed",
        error_message=exc.message,
        cause=repr(cause) if cause else None,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc.message),
    )


async def authgate_error_handler(request: Request, exc: AuthGateError) -> JSONResponse:
    """Handles the base `AuthGateError`, returning a `500 Internal Server Error`.

    This serves as a fallback for any custom application errors that do not
    have a more specific handler.
    """
    logger.error(
        "An unhandled application error occurred",
        error_code=exc.code,
        error_message=exc.message,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("An unexpected error occurred."),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all custom exception handlers with the FastAPI application.

    Starlette resolves handlers by walking the exception's MRO, so subclasses
    such as `PasswordPolicyError` reach their own handler before the base one.

    Args:
        app: The `FastAPI` application instance.
    """
    app.add_exception_handler(PasswordPolicyError, password_policy_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(PasswordResetError, password_reset_error_handler)
    app.add_exception_handler(RateLimitError, rate_limit_error_handler)
    app.add_exception_handler(InternalServerError, internal_server_error_handler)
    app.add_exception_handler(AuthGateError, authgate_error_handler)
