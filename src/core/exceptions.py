from __future__ import annotations

"""Centralized, structured exception hierarchy for authgate.

This module defines the hierarchy of custom exceptions for the application.
Each exception carries a machine-readable `code` for programmatic error
handling and a human-readable `message` that is safe to return to clients.

The hierarchy is designed to:
- Provide clear, specific errors for different failure scenarios.
- Map cleanly to HTTP status codes in the API layer (see `src.core.handlers`).
- Offer a consistent structure for logging and monitoring.
"""

from typing import Dict, Final, List, Mapping, Optional

__all__: Final = [
    "AuthGateError",
    "ValidationError",
    "PasswordPolicyError",
    "ConflictError",
    "DuplicateUserError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "NotFoundError",
    "UserNotFoundError",
    "PasswordResetError",
    "InvalidResetTokenError",
    "ResetTokenExpiredError",
    "RateLimitError",
    "RateLimitExceededError",
    "LoginDelayError",
    "EmailServiceError",
    "TemplateRenderError",
    "InternalServerError",
]


class AuthGateError(Exception):
    """Base exception class for all custom errors in the application.

    Attributes:
        message (str): A human-readable error message. Handlers return it to
                       the client, so it must never contain internal detail.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Validation errors (map to 400 Bad Request)
# ---------------------------------------------------------------------------


class ValidationError(AuthGateError):
    """Raised for malformed or missing request input.

    Attributes:
        details: Field name to list of messages, rendered verbatim in the
            ``error.details`` member of the response body.
    """

    def __init__(
        self,
        message: str = "Invalid input data",
        code: str = "validation_error",
        details: Optional[Mapping[str, List[str]]] = None,
    ):
        super().__init__(message, code)
        self.details = dict(details or {})


class PasswordPolicyError(ValidationError):
    """Raised when a password does not meet the required security policy.

    The violated rules are itemized as ``[{"code": ..., "message": ...}]`` so a
    client can highlight each unmet requirement.
    """

    def __init__(
        self,
        violations: List[Dict[str, str]],
        message: str = "Password does not meet security requirements",
        code: str = "password_policy_error",
    ):
        super().__init__(message, code)
        self.violations = list(violations)


# ---------------------------------------------------------------------------
# Conflict errors (map to 409 Conflict)
# ---------------------------------------------------------------------------


class ConflictError(AuthGateError):
    """Raised when a write would violate a uniqueness rule."""

    def __init__(self, message: str, code: str = "conflict"):
        super().__init__(message, code)


class DuplicateUserError(ConflictError):
    """Raised when registering an email address that is already taken."""

    def __init__(self, message: str = "Email already registered", code: str = "duplicate_user_error"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Auth-related errors (map to 401 Unauthorized)
# ---------------------------------------------------------------------------


class AuthenticationError(AuthGateError):
    """Raised for general authentication failures."""

    def __init__(self, message: str, code: str = "authentication_error"):
        super().__init__(message, code)


class InvalidCredentialsError(AuthenticationError):
    """Raised when user-provided credentials are invalid.

    The message is deliberately generic so callers cannot tell an unknown
    email from a wrong password.
    """

    def __init__(self, message: str = "Invalid email or password", code: str = "invalid_credentials"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Lookup errors
# ---------------------------------------------------------------------------


class NotFoundError(AuthGateError):
    """Raised when a referenced record does not exist (404)."""

    def __init__(self, message: str, code: str = "not_found"):
        super().__init__(message, code)


class UserNotFoundError(NotFoundError):
    """Raised when a requested user is not found in the database."""

    def __init__(self, message: str = "User not found", code: str = "user_not_found"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Password reset errors (map to 400 Bad Request)
# ---------------------------------------------------------------------------


class PasswordResetError(AuthGateError):
    """Base class for reset-token failures. All of them are terminal."""

    def __init__(self, message: str, code: str = "password_reset_error"):
        super().__init__(message, code)


class InvalidResetTokenError(PasswordResetError):
    """Raised when a reset token does not exist, including after it was used."""

    def __init__(
        self,
        message: str = "Invalid or expired password reset token",
        code: str = "invalid_reset_token",
    ):
        super().__init__(message, code)


class ResetTokenExpiredError(PasswordResetError):
    """Raised when a reset token exists but is past its expiry. The token is gone afterwards."""

    def __init__(
        self,
        message: str = "Password reset token has expired",
        code: str = "reset_token_expired",
    ):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Throttling errors (map to 429 Too Many Requests)
# ---------------------------------------------------------------------------


class RateLimitError(AuthGateError):
    """Base class for throttling rejections.

    Attributes:
        retry_after: Whole seconds the client should wait before retrying.
        headers: Extra response headers (quota and ``Retry-After``).
    """

    def __init__(
        self,
        message: str,
        code: str,
        retry_after: int,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message, code)
        self.retry_after = retry_after
        self.headers = dict(headers or {})


class RateLimitExceededError(RateLimitError):
    """Raised when a client has used up the quota of an endpoint class."""

    def __init__(
        self,
        retry_after: int,
        headers: Optional[Dict[str, str]] = None,
        message: str = "Too many requests. Please try again later.",
        code: str = "RATE_LIMIT_EXCEEDED",
    ):
        super().__init__(message, code, retry_after, headers)


class LoginDelayError(RateLimitError):
    """Raised while a client is serving a progressive login cooldown."""

    def __init__(
        self,
        retry_after: int,
        headers: Optional[Dict[str, str]] = None,
        message: str = "Too many failed login attempts. Please try again later.",
        code: str = "LOGIN_DELAY",
    ):
        super().__init__(message, code, retry_after, headers)


# ---------------------------------------------------------------------------
# Infrastructure errors (map to 500 Internal Server Error)
# ---------------------------------------------------------------------------


class EmailServiceError(AuthGateError):
    """Raised when an email cannot be rendered or delivered."""

    def __init__(self, message: str, code: str = "email_service_error"):
        super().__init__(message, code)


class TemplateRenderError(EmailServiceError):
    """Raised when an email template is missing or fails to render."""

    def __init__(self, message: str, code: str = "template_render_error"):
        super().__init__(message, code)


class InternalServerError(AuthGateError):
    """Raised at the API boundary for unexpected failures.

    The message is a fixed, operation-specific phrase such as
    ``"Failed to register user"``; the underlying cause is chained with
    ``raise ... from`` and logged, never returned.
    """

    def __init__(self, message: str, code: str = "internal_error"):
        super().__init__(message, code)
