"""Unit tests for UserAuthenticationService."""

from unittest.mock import AsyncMock

import pytest

from src.core.exceptions import InvalidCredentialsError
from src.domain.services.authentication import UserAuthenticationService
from src.utils.security import DUMMY_PASSWORD_HASH
from tests.factories import DEFAULT_PASSWORD, create_fake_user


@pytest.fixture
def mock_user_repository():
    return AsyncMock()


@pytest.fixture
def service(mock_user_repository):
    return UserAuthenticationService(mock_user_repository)


class TestUserAuthenticationService:
    @pytest.mark.asyncio
    async def test_returns_user_on_valid_credentials(self, service, mock_user_repository):
        user = create_fake_user()
        mock_user_repository.get_by_email.return_value = user

        assert await service.authenticate(user.email, DEFAULT_PASSWORD) is user

    @pytest.mark.asyncio
    async def test_wrong_password(self, service, mock_user_repository):
        mock_user_repository.get_by_email.return_value = create_fake_user()

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.authenticate("someone@example.com", "Wrong!Passw0rd")

        assert exc_info.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_unknown_email_indistinguishable_from_wrong_password(self, service, mock_user_repository):
        mock_user_repository.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.authenticate("nobody@example.com", DEFAULT_PASSWORD)

        assert exc_info.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_account_without_password_hash(self, service, mock_user_repository):
        user = create_fake_user()
        user.password = ""
        mock_user_repository.get_by_email.return_value = user

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate(user.email, DEFAULT_PASSWORD)

    @pytest.mark.asyncio
    async def test_unknown_email_still_runs_bcrypt(self, service, mock_user_repository, mocker):
        mock_user_repository.get_by_email.return_value = None
        mock_verify = mocker.patch(
            "src.domain.services.authentication.user_authentication_service.verify_password",
            return_value=False,
        )

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("nobody@example.com", DEFAULT_PASSWORD)

        mock_verify.assert_called_once_with(DEFAULT_PASSWORD, DUMMY_PASSWORD_HASH)

    @pytest.mark.asyncio
    async def test_dummy_hash_never_matches_a_real_login(self, service, mock_user_repository):
        mock_user_repository.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate("nobody@example.com", "authgate-unknown-account")
