"""Account creation and credential verification services."""

from .user_authentication_service import UserAuthenticationService
from .user_registration_service import UserRegistrationService

__all__ = ["UserAuthenticationService", "UserRegistrationService"]
