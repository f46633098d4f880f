"""In-memory rate limiting stores.

Process-local implementations of the rate limiting store interfaces. Each
store guards its map with a :class:`threading.Lock`, so it is safe under a
threaded server as well as on a single event loop. State is lost on restart
and is not shared between worker processes.
"""

import threading
from typing import Callable, Dict, Generic, Optional, TypeVar

from src.domain.rate_limiting.entities import FailedLoginEntry, RateLimitEntry
from src.domain.rate_limiting.repositories import (
    IEntryStore,
    IFailedLoginStore,
    IRateLimitStore,
)

E = TypeVar("E")


class InMemoryEntryStore(IEntryStore[E], Generic[E]):
    def __init__(self) -> None:
        self._entries: Dict[str, E] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[E]:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, entry: E) -> None:
        with self._lock:
            self._entries[key] = entry

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def sweep(self, is_stale: Callable[[E], bool]) -> int:
        with self._lock:
            stale = [key for key, entry in self._entries.items() if is_stale(entry)]
            for key in stale:
                del self._entries[key]
            return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class InMemoryRateLimitStore(InMemoryEntryStore[RateLimitEntry], IRateLimitStore):
    """Quota counters held in a dict."""


class InMemoryFailedLoginStore(InMemoryEntryStore[FailedLoginEntry], IFailedLoginStore):
    """Failed-login streaks held in a dict."""
