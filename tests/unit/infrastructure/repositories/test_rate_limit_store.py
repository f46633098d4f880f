"""Unit tests for the in-memory rate limiting stores."""

import threading

from src.domain.rate_limiting import FailedLoginEntry, IFailedLoginStore, IRateLimitStore, RateLimitEntry
from src.infrastructure.repositories import InMemoryFailedLoginStore, InMemoryRateLimitStore


class TestInMemoryRateLimitStore:
    def test_implements_store_interface(self):
        assert isinstance(InMemoryRateLimitStore(), IRateLimitStore)
        assert isinstance(InMemoryFailedLoginStore(), IFailedLoginStore)

    def test_get_set_delete(self):
        # Arrange
        store = InMemoryRateLimitStore()
        entry = RateLimitEntry(count=1, reset_at=1_000)

        # Act
        store.set("login:a", entry)

        # Assert
        assert store.get("login:a") is entry
        store.delete("login:a")
        assert store.get("login:a") is None

    def test_delete_missing_key_is_not_an_error(self):
        InMemoryRateLimitStore().delete("missing")

    def test_sweep_uses_predicate(self):
        store = InMemoryRateLimitStore()
        store.set("a", RateLimitEntry(count=0, reset_at=100))
        store.set("b", RateLimitEntry(count=0, reset_at=300))

        removed = store.sweep(lambda entry: entry.is_expired(200))

        assert removed == 1
        assert store.get("a") is None
        assert store.get("b") is not None

    def test_clear_and_len(self):
        store = InMemoryFailedLoginStore()
        store.set("a", FailedLoginEntry.first_seen(0))
        store.set("b", FailedLoginEntry.first_seen(0))
        assert len(store) == 2

        store.clear()

        assert len(store) == 0

    def test_concurrent_writers(self):
        store = InMemoryRateLimitStore()

        def writer(prefix):
            for i in range(200):
                store.set(f"{prefix}:{i}", RateLimitEntry(count=i, reset_at=i))

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 800
