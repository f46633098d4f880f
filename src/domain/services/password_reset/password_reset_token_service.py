"""Issuing of password reset tokens."""

from datetime import datetime
from typing import Callable, Optional

import structlog

from src.core.config.settings import settings
from src.domain.entities.user import User, utc_now
from src.domain.entities.verification_token import VerificationToken
from src.domain.interfaces.repositories import IResetTokenRepository
from src.domain.interfaces.services import IPasswordResetEmailService
from src.domain.value_objects.reset_token import ResetToken

logger = structlog.get_logger(__name__)


class PasswordResetTokenService:
    """Generates, stores and mails a reset token for a user.

    Earlier tokens of the same user are left untouched; each stays valid
    until it is used or expires.

    Args:
        token_repository: Where tokens are persisted
        email_service: Delivers the reset link
        expiry_seconds: Token lifetime
        now: Time source, replaceable in tests
    """

    def __init__(
        self,
        token_repository: IResetTokenRepository,
        email_service: IPasswordResetEmailService,
        expiry_seconds: int = settings.RESET_TOKEN_EXPIRY_SECONDS,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self._token_repository = token_repository
        self._email_service = email_service
        self._expiry_seconds = expiry_seconds
        self._now = now or utc_now

    async def issue(self, user: User) -> ResetToken:
        """Create a token for ``user`` and email it.

        The token row is committed before the email is sent. If delivery
        fails the row stays behind and simply expires unused.

        Raises:
            EmailServiceError: If the email cannot be rendered or delivered
        """
        token = ResetToken.generate(self._expiry_seconds, now=self._now())

        await self._token_repository.create(
            VerificationToken(
                token=token.value,
                identifier=user.id,
                expires=token.expires_at,
            )
        )
        logger.info(
            "Password reset token issued",
            user_id=user.id,
            token_prefix=token.mask(),
            expires_at=token.expires_at.isoformat(),
        )

        await self._email_service.send_password_reset_email(user, token)
        return token
