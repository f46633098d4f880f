"""Client identity used to bucket rate limiting state.

The identity is taken from proxy headers and is therefore only as trustworthy
as the proxy in front of the service: a client talking to the app directly
can pick any value it likes. Set ``TRUST_FORWARDED_HEADERS=false`` when no
proxy rewrites these headers, so the socket peer address is used instead.
"""

from typing import Callable

from fastapi import Request

from src.core.config.settings import settings

UNKNOWN_CLIENT = "unknown"

KeyFunc = Callable[[Request], str]


def get_client_identity(request: Request) -> str:
    """Derive the rate limiting key of the caller.

    Order: first hop of ``X-Forwarded-For``, then ``X-Real-IP``, then
    ``"unknown"``. With forwarded headers distrusted, the peer address.
    """
    if not settings.TRUST_FORWARDED_HEADERS:
        return request.client.host if request.client else UNKNOWN_CLIENT

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_CLIENT
