"""User Registration Domain Service.

This service creates accounts: it enforces the password policy, rejects
duplicate emails and stores the bcrypt hash of the password.
"""

import structlog

from src.core.exceptions import DuplicateUserError
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.domain.value_objects.password import Password
from src.utils.masking import mask_email
from src.utils.security import hash_password

logger = structlog.get_logger(__name__)


class UserRegistrationService:
    """Domain service for user registration operations.

    Security Features:
    - Strong password policy enforcement, all violations reported at once
    - Duplicate prevention (repository unique constraint as a backstop)
    - Plain-text passwords never leave this method
    """

    def __init__(self, user_repository: IUserRepository):
        self._user_repository = user_repository

    async def register_user(self, name: str, email: str, password: str) -> User:
        """Register a new user.

        Args:
            name: Display name, already validated by the request schema
            email: Email address in any case
            password: Plain-text password

        Returns:
            User: Newly created user entity

        Raises:
            PasswordPolicyError: If the password breaks any strength rule
            DuplicateUserError: If the email address is already registered
        """
        Password(password).ensure_acceptable()

        normalized_email = email.strip().lower()
        if await self._user_repository.get_by_email(normalized_email) is not None:
            logger.warning(
                "Registration failed - email already exists",
                email=mask_email(normalized_email),
            )
            raise DuplicateUserError()

        user = User(
            name=name.strip(),
            email=normalized_email,
            password=hash_password(password),
        )
        user = await self._user_repository.save(user)

        logger.info(
            "User registered",
            user_id=user.id,
            email=mask_email(user.email),
        )
        return user
