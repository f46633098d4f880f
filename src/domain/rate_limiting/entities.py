"""Rate Limiting Domain Entities

Mutable per-client state kept by the rate limit and login delay stores.

Entities:
- RateLimitEntry: Counters for one (endpoint class, client identity) pair
- FailedLoginEntry: Consecutive failed logins for one client identity
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RateLimitEntry:
    """Counters for one client within the current window of one endpoint class.

    Business Rules:
    - ``count`` only grows within a window; an expired entry is replaced, not reset
    - ``failed_attempts`` grows on every failure even when ``count`` does not
    - The entry is expired once ``now > reset_at``
    """

    count: int
    reset_at: int
    failed_attempts: int = 0
    last_failed_at: Optional[int] = None

    @classmethod
    def open_window(cls, now_ms: int, window_ms: int) -> "RateLimitEntry":
        return cls(count=0, reset_at=now_ms + window_ms)

    def is_expired(self, now_ms: int) -> bool:
        return now_ms > self.reset_at

    def record(self, counted: bool, success: bool, now_ms: int) -> None:
        """Apply the outcome of one request to the counters."""
        if counted:
            self.count += 1
        if not success:
            self.failed_attempts += 1
            self.last_failed_at = now_ms


@dataclass
class FailedLoginEntry:
    """Failure streak of one client across all login attempts.

    Business Rules:
    - The streak restarts when more than an hour passed since ``last_attempt``
    - ``next_allowed_at`` is recomputed on every recorded failure
    - The entry is removed on successful login or after a day of inactivity
    """

    attempts: int
    last_attempt: int
    next_allowed_at: int

    @classmethod
    def first_seen(cls, now_ms: int) -> "FailedLoginEntry":
        return cls(attempts=0, last_attempt=now_ms, next_allowed_at=now_ms)

    def is_idle(self, now_ms: int, idle_ms: int) -> bool:
        return now_ms - self.last_attempt > idle_ms
