"""Authentication settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class AuthSettings(BaseSettings):
    """Defines settings for password hashing, reset tokens and client identity.

    Security Note:
        - BCRYPT_WORK_FACTOR below 10 is only acceptable in test suites.
        - TRUST_FORWARDED_HEADERS should be disabled when the service is not
          deployed behind a proxy that overwrites ``X-Forwarded-For``, since
          clients can otherwise pick their own rate-limit bucket.
    """

    RESET_TOKEN_EXPIRY_SECONDS: int = Field(
        default=24 * 60 * 60,
        ge=60,
        description="Lifetime of a password reset token in seconds",
    )
    BCRYPT_WORK_FACTOR: int = Field(default=12, ge=4, le=31)
    TRUST_FORWARDED_HEADERS: bool = True
