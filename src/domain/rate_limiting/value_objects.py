"""
Rate Limiting Value Objects

Immutable value objects describing how an endpoint class is throttled and
what a throttling decision looks like.

Value Objects:
- RateLimitConfig: Window, quota and counting rules for one endpoint class
- RateLimitResult: Outcome of a quota check
- DelayResult: Outcome of a progressive login delay check

All timestamps are integer milliseconds since the Unix epoch, as produced by
:class:`src.domain.rate_limiting.clock.Clock`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True)
class RateLimitConfig:
    """
    Immutable configuration for one endpoint class.

    Business Rules:
    - ``name`` scopes the stored counters, so two classes never share quota
    - ``window_ms`` and ``max_attempts`` must be positive
    - Successful requests are not counted when ``skip_successful_requests``
    - Failed requests are not counted when ``skip_failed_requests``
    """
    name: str
    window_ms: int
    max_attempts: int
    skip_successful_requests: bool = False
    skip_failed_requests: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Rate limit config name must not be empty")
        if self.window_ms <= 0:
            raise ValueError("Rate limit window must be positive")
        if self.max_attempts <= 0:
            raise ValueError("Max attempts must be positive")

    def storage_key(self, identity: str) -> str:
        """Key under which the counters of ``identity`` live for this class."""
        return f"{self.name}:{identity}"

    def should_count(self, success: bool) -> bool:
        if success:
            return not self.skip_successful_requests
        return not self.skip_failed_requests


@dataclass(frozen=True, slots=True)
class RateLimitResult:
    """Outcome of :meth:`RateLimiter.check`.

    ``is_limited`` reports whether the *next* request would breach the quota.
    """
    is_limited: bool
    remaining: int
    reset_at: int

    def retry_after_seconds(self, now_ms: int) -> int:
        return max(0, math.ceil((self.reset_at - now_ms) / 1000))


@dataclass(frozen=True, slots=True)
class DelayResult:
    """Outcome of :meth:`ProgressiveLoginDelay.check_delay`."""
    is_delayed: bool
    delay_ms: int
    next_allowed_at: int

    @property
    def retry_after_seconds(self) -> int:
        return math.ceil(self.delay_ms / 1000)


HOUR_MS: Final = 60 * 60 * 1000
MINUTE_MS: Final = 60 * 1000

# Registration (and other general auth endpoints).
REGISTRATION_RATE_LIMIT: Final = RateLimitConfig(
    name="registration",
    window_ms=HOUR_MS,
    max_attempts=5,
    skip_successful_requests=True,
)

LOGIN_RATE_LIMIT: Final = RateLimitConfig(
    name="login",
    window_ms=15 * MINUTE_MS,
    max_attempts=5,
    skip_successful_requests=True,
)

PASSWORD_RESET_RATE_LIMIT: Final = RateLimitConfig(
    name="password-reset",
    window_ms=HOUR_MS,
    max_attempts=3,
    skip_successful_requests=True,
)
