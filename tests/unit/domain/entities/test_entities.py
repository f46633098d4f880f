"""Unit tests for the persisted entities."""

from datetime import datetime, timedelta, timezone

from src.domain.entities import User, VerificationToken

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestVerificationToken:
    def test_not_expired_at_expiry_instant(self):
        token = VerificationToken(token="a" * 64, identifier="u1", expires=NOW)

        assert token.is_expired(NOW) is False
        assert token.is_expired(NOW + timedelta(microseconds=1)) is True

    def test_naive_expiry_treated_as_utc(self):
        token = VerificationToken(token="a" * 64, identifier="u1", expires=NOW.replace(tzinfo=None))

        assert token.is_expired(NOW - timedelta(seconds=1)) is False
        assert token.is_expired(NOW + timedelta(seconds=1)) is True


class TestUser:
    def test_defaults(self):
        user = User(name="Jane", email="jane@example.com", password="hash")

        assert len(user.id) == 32
        assert user.image is None
        assert user.email_verified is None
        assert user.created_at.tzinfo is not None
        assert user.updated_at.tzinfo is not None

    def test_ids_are_unique(self):
        first = User(name="A", email="a@example.com", password="x")
        second = User(name="B", email="b@example.com", password="x")

        assert first.id != second.id
