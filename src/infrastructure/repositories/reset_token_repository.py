"""Password reset token persistence over SQLAlchemy."""

from typing import Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from src.domain.entities.user import User, utc_now
from src.domain.entities.verification_token import VerificationToken
from src.domain.interfaces.repositories import IResetTokenRepository

logger = get_logger(__name__)


def _mask(token: str) -> str:
    return f"{token[:8]}..."


class ResetTokenRepository(IResetTokenRepository):
    """Stores reset tokens in the ``verification_tokens`` table.

    Every write commits its own transaction. ``apply_password_reset`` issues
    the password update and the token delete in one transaction.
    """

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def create(self, token: VerificationToken) -> VerificationToken:
        try:
            self.db_session.add(token)
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error storing reset token",
                user_id=token.identifier,
                error=str(e),
            )
            raise

        logger.debug(
            "Reset token stored",
            user_id=token.identifier,
            token_prefix=_mask(token.token),
            expires=token.expires.isoformat(),
        )
        return token

    async def get_by_token(self, token: str) -> Optional[VerificationToken]:
        if not token:
            return None
        try:
            return await self.db_session.get(VerificationToken, token)
        except SQLAlchemyError as e:
            logger.error("Error retrieving reset token", token_prefix=_mask(token), error=str(e))
            raise

    async def delete(self, token: str) -> None:
        try:
            await self.db_session.execute(
                delete(VerificationToken).where(VerificationToken.token == token)
            )
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Error deleting reset token", token_prefix=_mask(token), error=str(e))
            raise

        logger.debug("Reset token deleted", token_prefix=_mask(token))

    async def apply_password_reset(
        self, token: VerificationToken, user: User, hashed_password: str
    ) -> None:
        """Update the password and burn the token in a single commit.

        Raises:
            SQLAlchemyError: After rolling back, if either statement fails
        """
        now = utc_now()
        try:
            await self.db_session.execute(
                update(User)
                .where(User.id == user.id)
                .values(password=hashed_password, updated_at=now)
            )
            await self.db_session.execute(
                delete(VerificationToken).where(VerificationToken.token == token.token)
            )
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Password reset transaction rolled back",
                user_id=user.id,
                token_prefix=_mask(token.token),
                error=str(e),
            )
            raise

        user.password = hashed_password
        user.updated_at = now
        logger.info("Password reset applied", user_id=user.id)
