"""Password Reset Request Service.

Handles the "forgot password" step. Whether or not the address belongs to an
account, the caller sees the same outcome; only a known address produces a
token and an email.
"""

import structlog

from src.domain.interfaces.repositories import IUserRepository
from src.domain.services.password_reset.password_reset_token_service import (
    PasswordResetTokenService,
)
from src.utils.masking import mask_email

logger = structlog.get_logger(__name__)


class PasswordResetRequestService:
    def __init__(
        self,
        user_repository: IUserRepository,
        token_service: PasswordResetTokenService,
    ):
        self._user_repository = user_repository
        self._token_service = token_service

    async def request_password_reset(self, email: str) -> None:
        """Issue a reset token if ``email`` belongs to an account.

        Raises:
            EmailServiceError: If the reset email cannot be delivered
        """
        user = await self._user_repository.get_by_email(email)
        if user is None:
            logger.info(
                "Password reset requested for unknown email",
                email=mask_email(email.strip().lower()),
            )
            return

        await self._token_service.issue(user)
