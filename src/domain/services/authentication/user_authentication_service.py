"""User Authentication Domain Service."""

import structlog

from src.core.exceptions import InvalidCredentialsError
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.utils.masking import mask_email
from src.utils.security import DUMMY_PASSWORD_HASH, verify_password

logger = structlog.get_logger(__name__)


class UserAuthenticationService:
    """Checks an email and password pair.

    Unknown addresses, accounts without a password hash and wrong passwords
    all raise the same :class:`InvalidCredentialsError`, so callers cannot
    learn which one happened.
    """

    def __init__(self, user_repository: IUserRepository):
        self._user_repository = user_repository

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user owning ``email`` if ``password`` matches.

        Raises:
            InvalidCredentialsError: On any credential mismatch
        """
        user = await self._user_repository.get_by_email(email)

        stored_hash = user.password if user is not None else DUMMY_PASSWORD_HASH
        password_matches = verify_password(password, stored_hash)

        if user is None or not password_matches:
            logger.info(
                "Authentication failed",
                email=mask_email(email.strip().lower()),
                user_found=user is not None,
            )
            raise InvalidCredentialsError()

        logger.info("Authentication succeeded", user_id=user.id)
        return user
