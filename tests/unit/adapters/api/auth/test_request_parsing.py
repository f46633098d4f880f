"""Tests for JSON body parsing and validation messages of the auth routes."""

import json

import pytest
from fastapi import Request

from src.adapters.api.v1.auth.schemas import (
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from src.adapters.api.v1.auth.utils import parse_body
from src.core.exceptions import ValidationError


def request_with_body(body: bytes) -> Request:
    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/v1/auth/register",
        "headers": [(b"content-type", b"application/json")],
        "query_string": b"",
    }
    return Request(scope, receive)


def json_request(payload) -> Request:
    return request_with_body(json.dumps(payload).encode())


@pytest.mark.asyncio
async def test_valid_register_body_is_normalized():
    request = json_request({"name": "  Jane  ", "email": "Jane@Example.COM", "password": "longenough"})

    body = await parse_body(request, RegisterRequest)

    assert body.name == "Jane"
    assert body.email == "jane@example.com"


@pytest.mark.asyncio
async def test_invalid_json():
    with pytest.raises(ValidationError) as exc_info:
        await parse_body(request_with_body(b"{not json"), LoginRequest)

    assert exc_info.value.details == {"body": ["Request body must be valid JSON"]}


@pytest.mark.asyncio
async def test_register_field_messages():
    request = json_request({"name": "J", "email": "nope", "password": "short"})

    with pytest.raises(ValidationError) as exc_info:
        await parse_body(request, RegisterRequest)

    assert exc_info.value.message == "Invalid input data"
    assert exc_info.value.details == {
        "name": ["Name must be at least 2 characters"],
        "email": ["Invalid email address"],
        "password": ["Password must be at least 8 characters"],
    }


@pytest.mark.asyncio
async def test_login_requires_password():
    request = json_request({"email": "jane@example.com", "password": ""})

    with pytest.raises(ValidationError) as exc_info:
        await parse_body(request, LoginRequest)

    assert exc_info.value.details == {"password": ["Password is required"]}


@pytest.mark.asyncio
async def test_missing_field_is_reported():
    with pytest.raises(ValidationError) as exc_info:
        await parse_body(json_request({"email": "jane@example.com"}), LoginRequest)

    assert list(exc_info.value.details) == ["password"]


@pytest.mark.asyncio
async def test_non_object_body():
    with pytest.raises(ValidationError) as exc_info:
        await parse_body(json_request(["a", "b"]), LoginRequest)

    assert "body" in exc_info.value.details


@pytest.mark.asyncio
async def test_reset_password_mismatch_reported_on_confirm_field():
    request = json_request(
        {"token": "abc", "password": "Str0ng!Passw0rd", "confirmPassword": "Other!Passw0rd"}
    )

    with pytest.raises(ValidationError) as exc_info:
        await parse_body(request, ResetPasswordRequest)

    assert exc_info.value.details == {"confirmPassword": ["Passwords do not match"]}


@pytest.mark.asyncio
async def test_reset_password_requires_token():
    request = json_request({"token": "", "password": "Str0ng!Passw0rd", "confirmPassword": "Str0ng!Passw0rd"})

    with pytest.raises(ValidationError) as exc_info:
        await parse_body(request, ResetPasswordRequest)

    assert exc_info.value.details == {"token": ["Token is required"]}
