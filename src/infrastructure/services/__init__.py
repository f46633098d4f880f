"""Infrastructure Services.

Concrete implementations of the domain service interfaces that deal with
external systems such as SMTP.
"""

from .email import EmailService, OutgoingEmail
from .password_reset_email_service import PasswordResetEmailService

__all__ = [
    "EmailService",
    "OutgoingEmail",
    "PasswordResetEmailService",
]
