"""Domain Services for the Authentication Bounded Context.

Authentication Domain Services:
- User Registration: account creation with password policy enforcement
- User Authentication: email and password verification

Password Reset Services:
- Token issuing, "forgot password" requests and reset completion
"""

from .authentication import UserAuthenticationService, UserRegistrationService
from .password_reset import (
    PasswordResetRequestService,
    PasswordResetService,
    PasswordResetTokenService,
)

__all__ = [
    "UserAuthenticationService",
    "UserRegistrationService",
    "PasswordResetRequestService",
    "PasswordResetService",
    "PasswordResetTokenService",
]
