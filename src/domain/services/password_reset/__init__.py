"""Password Reset Domain Services.

The reset lifecycle is split by step: issuing a token, handling a "forgot
password" request, and consuming a token to set a new password.
"""

from .password_reset_request_service import PasswordResetRequestService
from .password_reset_service import PasswordResetService
from .password_reset_token_service import PasswordResetTokenService

__all__ = [
    "PasswordResetRequestService",
    "PasswordResetService",
    "PasswordResetTokenService",
]
