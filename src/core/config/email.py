"""Email configuration settings.

This module defines email-related configuration parameters for sending
password reset emails. Provides secure defaults and validation for
production environments.
"""

from pathlib import Path
from typing import Optional

from pydantic import EmailStr, Field, SecretStr
from pydantic_settings import BaseSettings


class EmailSettings(BaseSettings):
    """Email configuration settings with secure defaults and validation.

    Security considerations:
    - SMTP credentials are handled as SecretStr to prevent logging
    - TLS is enforced by default

    Attributes:
        EMAIL_SMTP_HOST: SMTP server hostname
        EMAIL_SMTP_PORT: SMTP server port (587 for STARTTLS, 465 for SSL)
        EMAIL_SMTP_USERNAME: SMTP authentication username
        EMAIL_SMTP_PASSWORD: SMTP authentication password (SecretStr)
        EMAIL_SMTP_USE_TLS: Enable STARTTLS
        EMAIL_SMTP_USE_SSL: Enable implicit SSL
        EMAIL_FROM_EMAIL: Default sender email address
        EMAIL_FROM_NAME: Default sender name
        EMAIL_TEMPLATES_DIR: Directory containing email templates
        EMAIL_TEST_MODE: Log emails instead of sending them
    """

    EMAIL_SMTP_HOST: str = Field(default="localhost", description="SMTP server hostname")
    EMAIL_SMTP_PORT: int = Field(default=587, ge=1, le=65535)
    EMAIL_SMTP_USERNAME: Optional[str] = Field(default=None)
    EMAIL_SMTP_PASSWORD: Optional[SecretStr] = Field(default=None)
    EMAIL_SMTP_USE_TLS: bool = Field(default=True)
    EMAIL_SMTP_USE_SSL: bool = Field(default=False)

    EMAIL_FROM_EMAIL: EmailStr = Field(default="noreply@example.com")
    EMAIL_FROM_NAME: str = Field(default="The Team")

    EMAIL_TEMPLATES_DIR: str = Field(
        default=str(Path(__file__).resolve().parents[2] / "templates" / "email"),
        description="Directory containing email templates"
    )

    EMAIL_TEST_MODE: bool = Field(
        default=False,
        description="Enable test mode (emails logged instead of sent)"
    )

    def validate_smtp_config(self) -> None:
        """Validate SMTP configuration for production use.

        Raises:
            ValueError: If SMTP configuration is invalid or insecure
        """
        if self.EMAIL_TEST_MODE or getattr(self, "APP_ENV", "development") not in {"production", "staging"}:
            return

        if not self.EMAIL_SMTP_USERNAME or not self.EMAIL_SMTP_PASSWORD:
            raise ValueError(
                "EMAIL_SMTP_USERNAME and EMAIL_SMTP_PASSWORD are required in production"
            )

        if not (self.EMAIL_SMTP_USE_TLS or self.EMAIL_SMTP_USE_SSL):
            raise ValueError(
                "Either EMAIL_SMTP_USE_TLS or EMAIL_SMTP_USE_SSL must be enabled"
            )

        if self.EMAIL_SMTP_USE_TLS and self.EMAIL_SMTP_USE_SSL:
            raise ValueError(
                "Cannot enable both EMAIL_SMTP_USE_TLS and EMAIL_SMTP_USE_SSL simultaneously"
            )
