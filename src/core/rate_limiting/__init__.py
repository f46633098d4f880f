"""HTTP integration of the rate limiting domain.

- identity: derives the client key from a request
- guards: ``429`` short-circuits for quota and login delay
"""

from .guards import login_delay_response, rate_limit_response
from .identity import UNKNOWN_CLIENT, get_client_identity

__all__ = [
    "UNKNOWN_CLIENT",
    "get_client_identity",
    "login_delay_response",
    "rate_limit_response",
]
