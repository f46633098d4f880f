"""Time source for the rate limiting services.

Services take a :class:`Clock` instead of calling :func:`time.time` so that
window expiry and cooldowns can be tested without sleeping.
"""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    @abstractmethod
    def now_ms(self) -> int:
        """Current wall-clock time in integer milliseconds since the epoch."""
        raise NotImplementedError


class SystemClock(Clock):
    def now_ms(self) -> int:
        return int(time.time() * 1000)
