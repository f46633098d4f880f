"""
Rate Limiting Domain Repositories

Store interfaces through which the rate limiting services read and write
per-client state. The services never touch a concrete map, so an in-process
store can be swapped for a shared one without changing the engine.

Repositories:
- IEntryStore: Generic keyed store with get/set/delete/sweep
- IRateLimitStore: Store of RateLimitEntry objects
- IFailedLoginStore: Store of FailedLoginEntry objects
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

from .entities import FailedLoginEntry, RateLimitEntry

E = TypeVar("E")


class IEntryStore(ABC, Generic[E]):
    """Keyed store of rate limiting entries.

    Implementations must be safe to call from several threads at once. A
    shared-store implementation would map ``sweep`` onto native key expiry.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[E]:
        """Returns the entry stored under ``key`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, entry: E) -> None:
        """Stores ``entry`` under ``key``, replacing any previous entry."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Removes ``key``. Deleting a missing key is not an error."""
        raise NotImplementedError

    @abstractmethod
    def sweep(self, is_stale: Callable[[E], bool]) -> int:
        """Removes every entry for which ``is_stale`` returns True.

        Returns:
            int: Number of entries removed.
        """
        raise NotImplementedError


class IRateLimitStore(IEntryStore[RateLimitEntry]):
    """Store of quota counters keyed by ``"{config.name}:{identity}"``."""


class IFailedLoginStore(IEntryStore[FailedLoginEntry]):
    """Store of failed-login streaks keyed by client identity."""
