"""User Repository implementation using SQLAlchemy.

This module implements :class:`IUserRepository` over an async SQLAlchemy
session. Emails are normalized (stripped, lower-cased) before every query, and
addresses are masked in every log line.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from src.core.exceptions import DuplicateUserError
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.utils.masking import mask_email

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(IUserRepository):
    """SQLAlchemy implementation of the user repository.

    The unique constraint on ``users.email`` is the final word on duplicates:
    a racing insert that slips past the service's lookup surfaces here as an
    ``IntegrityError`` and is translated to :class:`DuplicateUserError`.
    """

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def get_by_id(self, user_id: str) -> Optional[User]:
        if not user_id:
            return None

        try:
            user = await self.db_session.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("Error retrieving user by ID", user_id=user_id, error=str(e))
            raise

        logger.debug("User lookup by ID", user_id=user_id, found=user is not None)
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address.

        Args:
            email: Address in any case; it is normalized before the query.

        Returns:
            Optional[User]: User entity if found, None otherwise
        """
        if not email or not email.strip():
            return None

        normalized = normalize_email(email)
        try:
            statement = select(User).where(User.email == normalized)
            result = await self.db_session.execute(statement)
            user = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(
                "Error retrieving user by email",
                email=mask_email(normalized),
                error=str(e),
            )
            raise

        logger.debug(
            "User lookup by email",
            email=mask_email(normalized),
            found=user is not None,
        )
        return user

    async def save(self, user: User) -> User:
        """Insert or update ``user`` and commit.

        Raises:
            DuplicateUserError: If another account already owns the email
            SQLAlchemyError: For any other database failure
        """
        user.email = normalize_email(user.email)
        try:
            self.db_session.add(user)
            await self.db_session.commit()
            await self.db_session.refresh(user)
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.warning(
                "Duplicate email on user save",
                email=mask_email(user.email),
            )
            raise DuplicateUserError() from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error saving user",
                email=mask_email(user.email),
                error=str(e),
            )
            raise

        logger.info("User saved", user_id=user.id, email=mask_email(user.email))
        return user
