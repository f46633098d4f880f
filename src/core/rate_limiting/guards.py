"""Request guards that turn throttling decisions into HTTP rejections.

Each guard inspects the request, asks the corresponding domain service for a
decision and returns a ready ``429`` response when the client must back off,
or ``None`` to let the handler continue. Guards never update counters; the
handler reports the outcome once the request has been processed.
"""

from datetime import datetime, timezone
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from src.core.exceptions import LoginDelayError, RateLimitExceededError
from src.core.handlers import rate_limit_error_response
from src.core.rate_limiting.identity import KeyFunc, get_client_identity
from src.domain.rate_limiting import ProgressiveLoginDelay, RateLimitConfig, RateLimiter


def _iso_timestamp(epoch_ms: int) -> str:
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def rate_limit_response(
    request: Request,
    limiter: RateLimiter,
    config: RateLimitConfig,
    key_func: Optional[KeyFunc] = None,
    identity: Optional[str] = None,
) -> Optional[JSONResponse]:
    """Reject the request with ``RATE_LIMIT_EXCEEDED`` when the quota is used up.

    Args:
        request: Incoming request.
        limiter: Quota engine holding the counters.
        config: Endpoint class the request belongs to.
        key_func: Overrides :func:`get_client_identity` for deriving the key.
        identity: Key already resolved by the caller; takes precedence over
            ``key_func`` so checks and updates use the same bucket.

    Returns:
        A 429 response carrying quota headers, or ``None`` when admitted.
    """
    if identity is None:
        identity = (key_func or get_client_identity)(request)
    result = limiter.check(identity, config)
    if not result.is_limited:
        return None

    retry_after = result.retry_after_seconds(limiter.clock.now_ms())
    error = RateLimitExceededError(
        retry_after=retry_after,
        headers={
            "X-RateLimit-Limit": str(config.max_attempts),
            "X-RateLimit-Remaining": str(result.remaining),
            "X-RateLimit-Reset": _iso_timestamp(result.reset_at),
            "Retry-After": str(retry_after),
        },
    )
    return rate_limit_error_response(request, error)


def login_delay_response(
    request: Request,
    delay: ProgressiveLoginDelay,
    key_func: Optional[KeyFunc] = None,
    identity: Optional[str] = None,
) -> Optional[JSONResponse]:
    """Reject the request with ``LOGIN_DELAY`` while a cooldown is running."""
    if identity is None:
        identity = (key_func or get_client_identity)(request)
    result = delay.check_delay(identity)
    if not result.is_delayed:
        return None

    retry_after = result.retry_after_seconds
    error = LoginDelayError(
        retry_after=retry_after,
        headers={"Retry-After": str(retry_after)},
    )
    return rate_limit_error_response(request, error)
