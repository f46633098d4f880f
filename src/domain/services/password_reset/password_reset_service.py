"""Password Reset Service.

This domain service consumes a reset token and sets the new password.
"""

from datetime import datetime
from typing import Callable, Optional

import structlog

from src.core.exceptions import (
    InvalidResetTokenError,
    ResetTokenExpiredError,
    UserNotFoundError,
)
from src.domain.entities.user import User, utc_now
from src.domain.interfaces.repositories import IResetTokenRepository, IUserRepository
from src.domain.value_objects.password import Password
from src.utils.security import hash_password

logger = structlog.get_logger(__name__)


class PasswordResetService:
    """Service for executing password resets with valid tokens.

    Checks run in this order, and the first failure ends the reset:

    1. the new password satisfies the strength policy
    2. the token exists
    3. the token has not expired (an expired token is deleted on sight)
    4. the token's owner still exists

    The password update and the token deletion are committed together, so a
    token authorizes exactly one reset.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        token_repository: IResetTokenRepository,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self._user_repository = user_repository
        self._token_repository = token_repository
        self._now = now or utc_now

    async def reset_password(self, token: str, new_password: str) -> User:
        """Reset the password of the user owning ``token``.

        Args:
            token: Reset token from the emailed link
            new_password: New plain-text password

        Returns:
            User: The user whose password was changed

        Raises:
            PasswordPolicyError: If the new password is too weak
            InvalidResetTokenError: If the token is unknown or already used
            ResetTokenExpiredError: If the token is past its expiry
            UserNotFoundError: If the token's owner no longer exists
        """
        Password(new_password).ensure_acceptable()

        stored = await self._token_repository.get_by_token(token)
        if stored is None:
            logger.warning("Password reset with unknown token", token_prefix=token[:8])
            raise InvalidResetTokenError()

        if stored.is_expired(self._now()):
            await self._token_repository.delete(stored.token)
            logger.warning(
                "Password reset with expired token",
                user_id=stored.identifier,
                token_prefix=token[:8],
            )
            raise ResetTokenExpiredError()

        user = await self._user_repository.get_by_id(stored.identifier)
        if user is None:
            logger.warning("Password reset token owner not found", user_id=stored.identifier)
            raise UserNotFoundError()

        await self._token_repository.apply_password_reset(
            stored, user, hash_password(new_password)
        )
        logger.info("Password reset completed", user_id=user.id)
        return user
