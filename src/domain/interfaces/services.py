"""Service interfaces for domain services.

These interfaces let the password reset services depend on abstractions of
infrastructure concerns such as email delivery.
"""

from abc import ABC, abstractmethod

from src.domain.entities.user import User
from src.domain.value_objects.reset_token import ResetToken


class IPasswordResetEmailService(ABC):
    """Interface for password reset email service."""

    @abstractmethod
    async def send_password_reset_email(self, user: User, token: ResetToken) -> None:
        """Send the reset link for ``token`` to ``user``.

        Args:
            user: User to send email to
            token: Reset token to include in email

        Raises:
            EmailServiceError: If the message cannot be rendered or delivered
        """
        raise NotImplementedError
