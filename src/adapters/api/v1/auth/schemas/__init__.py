from __future__ import annotations

"""Authentication API schemas package.

Request models live in ``requests`` and response models in ``responses``;
both are re-exported here.
"""

# flake8: noqa: F401 – re-export

from .requests import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from .responses import (
    AuthenticatedUserOut,
    LoginResponse,
    MessageResponse,
    RegisteredUserOut,
    RegisterResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "RegisteredUserOut",
    "AuthenticatedUserOut",
    "RegisterResponse",
    "LoginResponse",
    "MessageResponse",
]
