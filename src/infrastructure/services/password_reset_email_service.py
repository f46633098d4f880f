"""Infrastructure implementation of Password Reset Email Service.

This service implements the IPasswordResetEmailService interface: it builds
the reset link, renders the HTML and plain-text templates and hands the
message to :class:`EmailService`.
"""

import structlog

from src.core.config.settings import settings
from src.domain.entities.user import User
from src.domain.interfaces.services import IPasswordResetEmailService
from src.domain.value_objects.reset_token import ResetToken
from src.infrastructure.services.email.email_service import EmailService

logger = structlog.get_logger(__name__)

PASSWORD_RESET_SUBJECT = "Password Reset Request"
RESET_PATH = "/auth/reset-password"


def describe_duration(seconds: int) -> str:
    """Human wording for a token lifetime, e.g. ``86400 -> "24 hours"``."""
    for unit_seconds, unit in ((3600, "hour"), (60, "minute")):
        if seconds >= unit_seconds and seconds % unit_seconds == 0:
            count = seconds // unit_seconds
            return f"{count} {unit}{'s' if count != 1 else ''}"
    return f"{seconds} second{'s' if seconds != 1 else ''}"


class PasswordResetEmailService(IPasswordResetEmailService):
    """Sends the password reset link to a user.

    Args:
        email_service: Transport used for rendering and delivery
        base_url: Public origin of the web application the link points to
        expiry_seconds: Token lifetime restated in the message body
    """

    def __init__(
        self,
        email_service: EmailService,
        base_url: str = settings.APP_BASE_URL,
        expiry_seconds: int = settings.RESET_TOKEN_EXPIRY_SECONDS,
    ):
        self._email_service = email_service
        self._base_url = base_url.rstrip("/")
        self._expiry_seconds = expiry_seconds

    def build_reset_url(self, token: str) -> str:
        return f"{self._base_url}{RESET_PATH}?token={token}"

    async def send_password_reset_email(self, user: User, token: ResetToken) -> None:
        reset_url = self.build_reset_url(token.value)
        context = {
            "subject": PASSWORD_RESET_SUBJECT,
            "user_name": user.name or "User",
            "reset_url": reset_url,
            "expires_in": describe_duration(self._expiry_seconds),
            "sender_name": self._email_service.settings.EMAIL_FROM_NAME,
        }

        html_content = self._email_service.render_template("password_reset.html", **context)
        text_content = self._email_service.render_template("password_reset.txt", **context)

        await self._email_service.send_email(
            to_email=user.email,
            subject=PASSWORD_RESET_SUBJECT,
            html_content=html_content,
            text_content=text_content,
        )

        if self._email_service.test_mode:
            # Nothing was delivered; the link is the only way to finish the reset.
            logger.debug("Password reset link", user_id=user.id, reset_url=reset_url)

        logger.info(
            "Password reset email dispatched",
            user_id=user.id,
            token_prefix=token.mask(),
            expires_at=token.expires_at.isoformat(),
        )
