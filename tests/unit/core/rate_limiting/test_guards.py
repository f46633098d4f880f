"""Unit tests for the 429 request guards."""

import json

import pytest

from src.core.rate_limiting import login_delay_response, rate_limit_response
from src.domain.rate_limiting import RateLimitConfig
from tests.utils.requests import make_request

CLIENT = "203.0.113.7"


@pytest.fixture
def config():
    return RateLimitConfig(name="guarded", window_ms=60_000, max_attempts=2)


@pytest.fixture
def request_from_client():
    return make_request({"X-Forwarded-For": CLIENT})


class TestRateLimitResponse:
    def test_admits_under_quota(self, rate_limiter, config, request_from_client):
        assert rate_limit_response(request_from_client, rate_limiter, config) is None

    def test_rejects_with_body_and_headers(self, rate_limiter, clock, config, request_from_client):
        # Arrange
        for _ in range(2):
            rate_limiter.check(CLIENT, config)
            rate_limiter.update(CLIENT, config, success=False)
        clock.advance(10_000)

        # Act
        response = rate_limit_response(request_from_client, rate_limiter, config)

        # Assert
        assert response.status_code == 429
        assert json.loads(response.body) == {
            "error": {
                "message": "Too many requests. Please try again later.",
                "code": "RATE_LIMIT_EXCEEDED",
                "retryAfter": 50,
            }
        }
        assert response.headers["X-RateLimit-Limit"] == "2"
        assert response.headers["X-RateLimit-Remaining"] == "0"
        assert response.headers["X-RateLimit-Reset"] == "2023-11-14T22:14:20.000Z"
        assert response.headers["Retry-After"] == "50"

    def test_custom_key_func(self, rate_limiter, config, request_from_client):
        for _ in range(2):
            rate_limiter.check("tenant-42", config)
            rate_limiter.update("tenant-42", config, success=False)

        assert rate_limit_response(request_from_client, rate_limiter, config) is None
        rejection = rate_limit_response(
            request_from_client, rate_limiter, config, key_func=lambda request: "tenant-42"
        )
        assert rejection.status_code == 429

    def test_resolved_identity_wins_over_request(self, rate_limiter, config, request_from_client):
        for _ in range(2):
            rate_limiter.check("tenant-42", config)
            rate_limiter.update("tenant-42", config, success=False)

        rejection = rate_limit_response(request_from_client, rate_limiter, config, identity="tenant-42")

        assert rejection.status_code == 429

    def test_guard_does_not_count(self, rate_limiter, rate_limit_store, config, request_from_client):
        for _ in range(5):
            rate_limit_response(request_from_client, rate_limiter, config)

        assert rate_limit_store.get(config.storage_key(CLIENT)).count == 0


class TestLoginDelayResponse:
    def test_admits_without_failures(self, login_delay, request_from_client):
        assert login_delay_response(request_from_client, login_delay) is None

    def test_rejects_during_cooldown(self, login_delay, clock, request_from_client):
        # Arrange
        login_delay.record_failed_login(CLIENT)
        login_delay.record_failed_login(CLIENT)
        clock.advance(500)

        # Act
        response = login_delay_response(request_from_client, login_delay)

        # Assert
        assert response.status_code == 429
        body = json.loads(response.body)
        assert body["error"]["code"] == "LOGIN_DELAY"
        assert body["error"]["message"] == "Too many failed login attempts. Please try again later."
        assert body["error"]["retryAfter"] == 2
        assert response.headers["Retry-After"] == "2"

    def test_resolved_identity_wins_over_request(self, login_delay, request_from_client):
        login_delay.record_failed_login("tenant-42")

        assert login_delay_response(request_from_client, login_delay) is None
        rejection = login_delay_response(request_from_client, login_delay, identity="tenant-42")
        assert rejection.status_code == 429

    def test_admits_after_cooldown(self, login_delay, clock, request_from_client):
        login_delay.record_failed_login(CLIENT)
        clock.advance(1_000)

        assert login_delay_response(request_from_client, login_delay) is None
