"""End-to-end behaviour of forgot-password and reset-password."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from src.core.exceptions import EmailServiceError
from src.domain.entities.verification_token import VerificationToken
from src.infrastructure.dependency_injection.auth_dependencies import (
    get_password_reset_email_service,
)
from src.utils.security import verify_password
from tests.factories import DEFAULT_PASSWORD, create_fake_user

FORGOT_URL = "/api/v1/auth/forgot-password"
RESET_URL = "/api/v1/auth/reset-password"
ANTI_ENUMERATION_MESSAGE = "If your email is registered, you will receive a password reset link."
NEW_PASSWORD = "N3w!Passw0rd"


@pytest.fixture
def existing_user(user_repository):
    user = create_fake_user(name="Alice", email="alice@example.com")
    user_repository.users[user.id] = user
    return user


def reset_payload(token, password=NEW_PASSWORD, confirm=None):
    return {"token": token, "password": password, "confirmPassword": confirm or password}


async def issue_token(async_client, token_repository, user):
    response = await async_client.post(FORGOT_URL, json={"email": user.email})
    assert response.status_code == 200
    [stored] = token_repository.for_user(user.id)
    return stored


@pytest.mark.asyncio
async def test_forgot_password_sends_link(async_client, existing_user, token_repository, email_service):
    response = await async_client.post(FORGOT_URL, json={"email": "ALICE@example.com"})

    assert response.status_code == 200
    assert response.json() == {"message": ANTI_ENUMERATION_MESSAGE}
    [stored] = token_repository.for_user(existing_user.id)
    assert len(stored.token) == 64
    [message] = email_service.sent_messages
    assert message.to_email == "alice@example.com"
    assert f"/auth/reset-password?token={stored.token}" in message.text_content


@pytest.mark.asyncio
async def test_forgot_password_unknown_email_looks_the_same(async_client, token_repository, email_service):
    response = await async_client.post(FORGOT_URL, json={"email": "nobody@example.com"})

    assert response.status_code == 200
    assert response.json() == {"message": ANTI_ENUMERATION_MESSAGE}
    assert token_repository.tokens == {}
    assert len(email_service.sent_messages) == 0


@pytest.mark.asyncio
async def test_forgot_password_invalid_email(async_client):
    response = await async_client.post(FORGOT_URL, json={"email": "not-an-email"})

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"email": ["Invalid email address"]}


@pytest.mark.asyncio
async def test_forgot_password_email_failure(app, async_client, existing_user, token_repository):
    failing = AsyncMock()
    failing.send_password_reset_email.side_effect = EmailServiceError("smtp down")
    app.dependency_overrides[get_password_reset_email_service] = lambda: failing

    response = await async_client.post(FORGOT_URL, json={"email": "alice@example.com"})

    assert response.status_code == 500
    assert response.json() == {"error": {"message": "Failed to process password reset request"}}
    assert len(token_repository.for_user(existing_user.id)) == 1


@pytest.mark.asyncio
async def test_every_request_issues_a_new_token(async_client, existing_user, token_repository):
    for _ in range(2):
        await async_client.post(FORGOT_URL, json={"email": "alice@example.com"})

    assert len(token_repository.for_user(existing_user.id)) == 2


@pytest.mark.asyncio
async def test_reset_password_success(async_client, existing_user, token_repository):
    stored = await issue_token(async_client, token_repository, existing_user)

    response = await async_client.post(RESET_URL, json=reset_payload(stored.token))

    assert response.status_code == 200
    assert response.json() == {"message": "Password has been reset successfully"}
    assert verify_password(NEW_PASSWORD, existing_user.password)
    assert token_repository.tokens == {}


@pytest.mark.asyncio
async def test_reset_token_is_single_use(async_client, existing_user, token_repository):
    stored = await issue_token(async_client, token_repository, existing_user)
    await async_client.post(RESET_URL, json=reset_payload(stored.token))

    response = await async_client.post(RESET_URL, json=reset_payload(stored.token, "An0ther!Passw0rd"))

    assert response.status_code == 400
    assert response.json() == {"error": {"message": "Invalid or expired password reset token"}}
    assert verify_password(NEW_PASSWORD, existing_user.password)


@pytest.mark.asyncio
async def test_expired_token_is_rejected_and_removed(async_client, existing_user, token_repository, clock):
    stored = VerificationToken(
        token="ef" * 32, identifier=existing_user.id, expires=clock.now() - timedelta(seconds=1)
    )
    token_repository.tokens[stored.token] = stored

    response = await async_client.post(RESET_URL, json=reset_payload(stored.token))

    assert response.status_code == 400
    assert response.json() == {"error": {"message": "Password reset token has expired"}}
    assert stored.token not in token_repository.tokens
    assert verify_password(DEFAULT_PASSWORD, existing_user.password)


@pytest.mark.asyncio
async def test_reset_password_mismatch(async_client):
    response = await async_client.post(
        RESET_URL, json=reset_payload("ab" * 32, NEW_PASSWORD, "Different!Passw0rd")
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"confirmPassword": ["Passwords do not match"]}


@pytest.mark.asyncio
async def test_reset_password_weak_password(async_client, existing_user, token_repository):
    stored = await issue_token(async_client, token_repository, existing_user)

    response = await async_client.post(RESET_URL, json=reset_payload(stored.token, "weakpassword"))

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Password does not meet security requirements"
    assert stored.token in token_repository.tokens


@pytest.mark.asyncio
async def test_reset_password_owner_missing(async_client, existing_user, token_repository, user_repository):
    stored = await issue_token(async_client, token_repository, existing_user)
    del user_repository.users[existing_user.id]

    response = await async_client.post(RESET_URL, json=reset_payload(stored.token))

    assert response.status_code == 404
    assert response.json() == {"error": {"message": "User not found"}}


@pytest.mark.asyncio
async def test_token_guessing_is_rate_limited(async_client):
    for _ in range(3):
        response = await async_client.post(RESET_URL, json=reset_payload("00" * 32))
        assert response.status_code == 400

    response = await async_client.post(RESET_URL, json=reset_payload("00" * 32))

    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
    assert response.headers["X-RateLimit-Limit"] == "3"
