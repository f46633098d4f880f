"""Domain Value Objects for the authentication domain.

Value objects are immutable objects that describe domain concepts by their attributes
rather than their identity.
"""

from .password import (
    Password,
    PasswordRuleViolation,
    calculate_password_strength,
    get_password_strength_label,
    is_password_strength_acceptable,
    validate_password_strength,
)
from .reset_token import ResetToken

__all__ = [
    "Password",
    "PasswordRuleViolation",
    "ResetToken",
    "calculate_password_strength",
    "get_password_strength_label",
    "is_password_strength_acceptable",
    "validate_password_strength",
]
