"""Repository interfaces for abstracting data persistence in the domain layer.

This module defines the abstract base classes (interfaces) for repositories,
which act as a "port" in the context of Hexagonal Architecture. The domain layer
uses these interfaces to interact with persistence mechanisms without being
coupled to any specific technology.

The concrete implementations of these interfaces reside in the `infrastructure`
layer, acting as "adapters" that translate the domain's requests into specific
database queries.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.user import User
from src.domain.entities.verification_token import VerificationToken


class IUserRepository(ABC):
    """An interface defining the contract for user persistence operations.

    This repository is responsible for managing the lifecycle of the `User`
    aggregate root. Emails are compared in their normalized (lower-cased,
    stripped) form.
    """

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Retrieves a user by their unique identifier.

        Args:
            user_id: The opaque id of the user.

        Returns:
            An optional `User` entity. Returns `None` if no user is found.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Retrieves a user by their email address.

        Args:
            email: The email address to search for.

        Returns:
            An optional `User` entity. Returns `None` if no user is found.
        """
        raise NotImplementedError

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persists a new or modified user and returns the stored entity.

        Raises:
            DuplicateUserError: If the email address is already taken.
        """
        raise NotImplementedError


class IResetTokenRepository(ABC):
    """An interface for storing password reset tokens.

    Tokens are looked up by exact string match. Deleting a token is what makes
    it unusable; there is no "used" flag.
    """

    @abstractmethod
    async def create(self, token: VerificationToken) -> VerificationToken:
        """Stores a newly issued token."""
        raise NotImplementedError

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[VerificationToken]:
        """Returns the stored token row or `None` if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, token: str) -> None:
        """Removes a token. Removing a missing token is not an error."""
        raise NotImplementedError

    @abstractmethod
    async def apply_password_reset(
        self, token: VerificationToken, user: User, hashed_password: str
    ) -> None:
        """Sets the user's new password hash and deletes the token atomically.

        The password update and the token deletion either both take effect or
        neither does, so a failed update never burns the token and a
        successful one never leaves it usable.
        """
        raise NotImplementedError
