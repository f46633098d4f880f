"""Register, log in, forget the password, reset it and log in again."""

import re

import pytest

from tests.factories import DEFAULT_PASSWORD

NEW_PASSWORD = "Br4nd!NewPass"
TOKEN_IN_LINK = re.compile(r"token=([0-9a-f]{64})")


@pytest.mark.asyncio
async def test_full_account_recovery(async_client, clock, email_service):
    registered = await async_client.post(
        "/api/v1/auth/register",
        json={"name": "Bob Builder", "email": "bob@example.com", "password": DEFAULT_PASSWORD},
    )
    assert registered.status_code == 201

    login = await async_client.post(
        "/api/v1/auth/login", json={"email": "bob@example.com", "password": DEFAULT_PASSWORD}
    )
    assert login.status_code == 200
    assert login.json()["user"]["id"] == registered.json()["user"]["id"]

    forgot = await async_client.post("/api/v1/auth/forgot-password", json={"email": "bob@example.com"})
    assert forgot.status_code == 200

    [message] = email_service.sent_messages
    token = TOKEN_IN_LINK.search(message.text_content).group(1)

    reset = await async_client.post(
        "/api/v1/auth/reset-password",
        json={"token": token, "password": NEW_PASSWORD, "confirmPassword": NEW_PASSWORD},
    )
    assert reset.status_code == 200

    old_login = await async_client.post(
        "/api/v1/auth/login", json={"email": "bob@example.com", "password": DEFAULT_PASSWORD}
    )
    assert old_login.status_code == 401

    clock.advance(1000)
    new_login = await async_client.post(
        "/api/v1/auth/login", json={"email": "bob@example.com", "password": NEW_PASSWORD}
    )
    assert new_login.status_code == 200
