"""
Rate Limiting Domain Services

Two independent throttles guard the authentication endpoints:

- RateLimiter: fixed-window quota per (endpoint class, client identity).
  Bounds the volume of counted requests a client may make in a window.
- ProgressiveLoginDelay: exponential cooldown after consecutive failed
  logins from one client. Forgiven on success or after an hour of quiet.

Both sweep stale state lazily on each check instead of running a timer, and
expose ``sweep()`` for hosts that prefer a periodic task.

Known weakness: ``check`` followed by ``update`` is not atomic. Two requests
from the same client that interleave between the calls can both be admitted
at the edge of the quota. Limiting here is best effort, not a hard boundary.
"""

from typing import Final, Optional

import structlog

from .clock import Clock, SystemClock
from .entities import FailedLoginEntry, RateLimitEntry
from .repositories import IFailedLoginStore, IRateLimitStore
from .value_objects import HOUR_MS, DelayResult, RateLimitConfig, RateLimitResult

logger = structlog.get_logger(__name__)

BASE_DELAY_MS: Final = 1000
MAX_ESCALATING_ATTEMPTS: Final = 5
MAX_DELAY_MS: Final = 30 * 1000
FAILED_LOGIN_STREAK_RESET_MS: Final = HOUR_MS
FAILED_LOGIN_RETENTION_MS: Final = 24 * HOUR_MS


def calculate_progressive_delay(attempts: int) -> int:
    """Cooldown in milliseconds after ``attempts`` consecutive failures.

    1s, 2s, 4s, 8s, 16s for the first five failures, then a flat 30s.
    """
    if attempts <= 0:
        return 0
    if attempts <= MAX_ESCALATING_ATTEMPTS:
        return (2 ** (attempts - 1)) * BASE_DELAY_MS
    return MAX_DELAY_MS


class RateLimiter:
    """Fixed-window quota engine.

    Args:
        store: Where the per-client counters live.
        clock: Time source, defaults to the system clock.
    """

    def __init__(self, store: IRateLimitStore, clock: Optional[Clock] = None):
        self._store = store
        self._clock = clock or SystemClock()

    @property
    def clock(self) -> Clock:
        return self._clock

    def check(self, identity: str, config: RateLimitConfig) -> RateLimitResult:
        """Report whether the next request from ``identity`` would breach the quota.

        Opens a fresh window when the client has no entry or its window has
        passed. Never increments the counter.
        """
        self.sweep()

        now = self._clock.now_ms()
        key = config.storage_key(identity)
        entry = self._store.get(key)

        if entry is None or entry.is_expired(now):
            entry = RateLimitEntry.open_window(now, config.window_ms)
            self._store.set(key, entry)

        result = RateLimitResult(
            is_limited=entry.count >= config.max_attempts,
            remaining=max(0, config.max_attempts - entry.count),
            reset_at=entry.reset_at,
        )
        if result.is_limited:
            logger.warning(
                "Rate limit exceeded",
                rate_limit=config.name,
                identity=identity,
                count=entry.count,
                reset_at=entry.reset_at,
            )
        return result

    def update(self, identity: str, config: RateLimitConfig, success: bool = True) -> None:
        """Record the outcome of a request admitted by :meth:`check`.

        Does nothing when ``check`` was not called first for this client.
        """
        key = config.storage_key(identity)
        entry = self._store.get(key)
        if entry is None:
            logger.debug("Rate limit update without entry", rate_limit=config.name)
            return

        entry.record(config.should_count(success), success, self._clock.now_ms())
        self._store.set(key, entry)

    def sweep(self) -> int:
        """Delete entries whose window has passed."""
        now = self._clock.now_ms()
        removed = self._store.sweep(lambda entry: entry.is_expired(now))
        if removed:
            logger.debug("Expired rate limit entries removed", removed=removed)
        return removed


class ProgressiveLoginDelay:
    """Escalating cooldown between consecutive failed logins of one client.

    Login delay state is global per client and is not scoped by endpoint
    class.
    """

    def __init__(self, store: IFailedLoginStore, clock: Optional[Clock] = None):
        self._store = store
        self._clock = clock or SystemClock()

    @property
    def clock(self) -> Clock:
        return self._clock

    def check_delay(self, identity: str) -> DelayResult:
        self.sweep()

        now = self._clock.now_ms()
        entry = self._store.get(identity)

        if entry is not None and now < entry.next_allowed_at:
            return DelayResult(
                is_delayed=True,
                delay_ms=entry.next_allowed_at - now,
                next_allowed_at=entry.next_allowed_at,
            )
        return DelayResult(is_delayed=False, delay_ms=0, next_allowed_at=now)

    def record_failed_login(self, identity: str) -> None:
        now = self._clock.now_ms()
        entry = self._store.get(identity)
        if entry is None:
            entry = FailedLoginEntry.first_seen(now)

        if entry.is_idle(now, FAILED_LOGIN_STREAK_RESET_MS):
            entry.attempts = 0

        entry.attempts += 1
        entry.last_attempt = now
        entry.next_allowed_at = now + calculate_progressive_delay(entry.attempts)
        self._store.set(identity, entry)

        logger.info(
            "Failed login recorded",
            identity=identity,
            attempts=entry.attempts,
            next_allowed_at=entry.next_allowed_at,
        )

    def clear_failed_logins(self, identity: str) -> None:
        self._store.delete(identity)

    def sweep(self) -> int:
        """Delete streaks idle for more than a day."""
        now = self._clock.now_ms()
        return self._store.sweep(lambda entry: entry.is_idle(now, FAILED_LOGIN_RETENTION_MS))
