"""Repository implementations for the infrastructure layer."""

from .rate_limit_store import InMemoryEntryStore, InMemoryFailedLoginStore, InMemoryRateLimitStore
from .reset_token_repository import ResetTokenRepository
from .user_repository import UserRepository

__all__ = [
    "UserRepository",
    "ResetTokenRepository",
    "InMemoryEntryStore",
    "InMemoryRateLimitStore",
    "InMemoryFailedLoginStore",
]
