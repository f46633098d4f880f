"""Template rendering and SMTP delivery."""

from .email_service import EmailService, OutgoingEmail

__all__ = ["EmailService", "OutgoingEmail"]
