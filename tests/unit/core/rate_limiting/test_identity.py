"""Unit tests for client identity derivation."""

from src.core.config.settings import settings
from src.core.rate_limiting import UNKNOWN_CLIENT, get_client_identity
from tests.utils.requests import make_request


class TestGetClientIdentity:
    def test_first_forwarded_hop_wins(self):
        request = make_request({"X-Forwarded-For": " 203.0.113.7 , 10.0.0.2, 10.0.0.3", "X-Real-IP": "198.51.100.9"})

        assert get_client_identity(request) == "203.0.113.7"

    def test_real_ip_used_without_forwarded_for(self):
        request = make_request({"X-Real-IP": "198.51.100.9"})

        assert get_client_identity(request) == "198.51.100.9"

    def test_empty_forwarded_hop_falls_through(self):
        request = make_request({"X-Forwarded-For": " , 10.0.0.2", "X-Real-IP": "198.51.100.9"})

        assert get_client_identity(request) == "198.51.100.9"

    def test_unknown_without_headers(self):
        assert get_client_identity(make_request()) == UNKNOWN_CLIENT == "unknown"

    def test_peer_address_when_forwarded_headers_distrusted(self, monkeypatch):
        monkeypatch.setattr(settings, "TRUST_FORWARDED_HEADERS", False)
        request = make_request({"X-Forwarded-For": "203.0.113.7"}, client=("10.1.2.3", 4000))

        assert get_client_identity(request) == "10.1.2.3"

    def test_unknown_when_peer_missing_and_headers_distrusted(self, monkeypatch):
        monkeypatch.setattr(settings, "TRUST_FORWARDED_HEADERS", False)

        assert get_client_identity(make_request(client=None)) == UNKNOWN_CLIENT
