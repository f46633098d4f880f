from __future__ import annotations

"""Re-export factory functions for generating fake test data."""

# flake8: noqa: F401 – re-export

from .user import DEFAULT_PASSWORD, create_fake_user

__all__ = ["DEFAULT_PASSWORD", "create_fake_user"]
