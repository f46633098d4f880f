from __future__ import annotations

"""Request-payload Pydantic models for authentication endpoints.

Validators raise ``ValueError`` with the exact message shown to clients; the
routes collect them into the ``details`` map of a 400 response.
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

MIN_NAME_LENGTH = 2
MIN_PASSWORD_LENGTH = 8


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError("Invalid email address") from e
    return value.strip().lower()


class _AuthRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(_AuthRequest):
    """Payload expected by ``POST /auth/register``."""

    name: str = Field(..., examples=["Jane Doe"])
    email: str = Field(..., examples=["jane@example.com"])
    password: str = Field(..., examples=["Str0ngP@ssw0rd"])

    @field_validator("name")
    @classmethod
    def name_length(cls, value: str) -> str:
        if len(value.strip()) < MIN_NAME_LENGTH:
            raise ValueError(f"Name must be at least {MIN_NAME_LENGTH} characters")
        return value.strip()

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return value


class LoginRequest(_AuthRequest):
    """Payload expected by ``POST /auth/login``."""

    email: str = Field(..., examples=["jane@example.com"])
    password: str = Field(..., examples=["Str0ngP@ssw0rd"])

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def password_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value


class ForgotPasswordRequest(_AuthRequest):
    """Payload expected by ``POST /auth/forgot-password``."""

    email: str = Field(
        ...,
        examples=["jane@example.com"],
        description="Email address to send password reset instructions to",
    )

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        return _check_email(value)


class ResetPasswordRequest(_AuthRequest):
    """Payload expected by ``POST /auth/reset-password``."""

    token: str = Field(..., description="Password reset token received via email")
    password: str = Field(..., description="New password")
    confirm_password: str = Field(..., alias="confirmPassword")

    @field_validator("token")
    @classmethod
    def token_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Token is required")
        return value

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return value

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Confirm password must be at least {MIN_PASSWORD_LENGTH} characters")
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("Passwords do not match")
        return value
