"""Domain Interfaces for dependency inversion.

These interfaces define contracts that infrastructure layers must implement,
so that domain services depend on abstractions rather than concrete
databases or mail transports.
"""

from .repositories import IResetTokenRepository, IUserRepository
from .services import IPasswordResetEmailService

__all__ = [
    "IUserRepository",
    "IResetTokenRepository",
    "IPasswordResetEmailService",
]
