"""Unit tests for UserRegistrationService."""

from unittest.mock import AsyncMock

import pytest

from src.core.exceptions import DuplicateUserError, PasswordPolicyError
from src.domain.services.authentication import UserRegistrationService
from src.utils.security import verify_password
from tests.factories import create_fake_user


@pytest.fixture
def mock_user_repository():
    """Mock user repository that echoes saved users."""
    repository = AsyncMock()
    repository.get_by_email.return_value = None
    repository.save.side_effect = lambda user: user
    return repository


@pytest.fixture
def service(mock_user_repository):
    return UserRegistrationService(mock_user_repository)


class TestUserRegistrationService:
    @pytest.mark.asyncio
    async def test_registers_user_with_hashed_password(self, service, mock_user_repository):
        # Act
        user = await service.register_user("  Jane Doe ", "Jane@Example.COM ", "Str0ng!Pass")

        # Assert
        assert user.name == "Jane Doe"
        assert user.email == "jane@example.com"
        assert user.password != "Str0ng!Pass"
        assert verify_password("Str0ng!Pass", user.password)
        mock_user_repository.get_by_email.assert_awaited_once_with("jane@example.com")
        mock_user_repository.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_weak_password_rejected_before_lookup(self, service, mock_user_repository):
        with pytest.raises(PasswordPolicyError) as exc_info:
            await service.register_user("Jane", "jane@example.com", "weakpassword")

        assert {v["code"] for v in exc_info.value.violations} == {
            "password.uppercase",
            "password.number",
            "password.special",
        }
        mock_user_repository.get_by_email.assert_not_awaited()
        mock_user_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, service, mock_user_repository):
        # Arrange
        mock_user_repository.get_by_email.return_value = create_fake_user(email="jane@example.com")

        # Act & Assert
        with pytest.raises(DuplicateUserError) as exc_info:
            await service.register_user("Jane", "jane@example.com", "Str0ng!Pass")

        assert exc_info.value.message == "Email already registered"
        mock_user_repository.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_detected_by_repository_propagates(self, service, mock_user_repository):
        mock_user_repository.save.side_effect = DuplicateUserError()

        with pytest.raises(DuplicateUserError):
            await service.register_user("Jane", "jane@example.com", "Str0ng!Pass")
