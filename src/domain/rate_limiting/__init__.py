"""Rate Limiting Domain Module

Fixed-window quotas per endpoint class and progressive delays after failed
logins, keyed by client identity:

- Value Objects: RateLimitConfig and the check results
- Entities: the mutable per-client counters
- Repositories: store contracts the services depend on
- Domain Services: RateLimiter and ProgressiveLoginDelay
"""

from .clock import Clock, SystemClock
from .entities import FailedLoginEntry, RateLimitEntry
from .repositories import IEntryStore, IFailedLoginStore, IRateLimitStore
from .services import ProgressiveLoginDelay, RateLimiter, calculate_progressive_delay
from .value_objects import (
    LOGIN_RATE_LIMIT,
    PASSWORD_RESET_RATE_LIMIT,
    REGISTRATION_RATE_LIMIT,
    DelayResult,
    RateLimitConfig,
    RateLimitResult,
)

__all__ = [
    "Clock",
    "SystemClock",
    "RateLimitConfig",
    "RateLimitResult",
    "DelayResult",
    "REGISTRATION_RATE_LIMIT",
    "LOGIN_RATE_LIMIT",
    "PASSWORD_RESET_RATE_LIMIT",
    "RateLimitEntry",
    "FailedLoginEntry",
    "IEntryStore",
    "IRateLimitStore",
    "IFailedLoginStore",
    "RateLimiter",
    "ProgressiveLoginDelay",
    "calculate_progressive_delay",
]
