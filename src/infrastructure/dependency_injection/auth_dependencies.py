"""Dependencies for the authentication routes.

Each factory builds one collaborator from its own dependencies, so a test can
replace any layer through ``app.dependency_overrides``. Repositories and
services are built per request around the request's database session. The
throttling engines and the email transport are process-wide singletons:
their state has to outlive a single request.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config.settings import settings
from src.domain.interfaces import (
    IPasswordResetEmailService,
    IResetTokenRepository,
    IUserRepository,
)
from src.domain.rate_limiting import ProgressiveLoginDelay, RateLimiter
from src.domain.services.authentication import (
    UserAuthenticationService,
    UserRegistrationService,
)
from src.domain.services.password_reset import (
    PasswordResetRequestService,
    PasswordResetService,
    PasswordResetTokenService,
)
from src.infrastructure.database import get_async_db
from src.infrastructure.repositories import (
    InMemoryFailedLoginStore,
    InMemoryRateLimitStore,
    ResetTokenRepository,
    UserRepository,
)
from src.infrastructure.services import EmailService, PasswordResetEmailService

# ---------------------------------------------------------------------------
# Type aliases for dependency injection
# ---------------------------------------------------------------------------

AsyncDB = Annotated[AsyncSession, Depends(get_async_db)]

# ---------------------------------------------------------------------------
# Infrastructure Layer Dependencies
# ---------------------------------------------------------------------------


def get_user_repository(db: AsyncDB) -> IUserRepository:
    return UserRepository(db)


def get_reset_token_repository(db: AsyncDB) -> IResetTokenRepository:
    return ResetTokenRepository(db)


@lru_cache(maxsize=1)
def get_email_service() -> EmailService:
    """Process-wide email transport, built on first use."""
    return EmailService(settings)


def get_password_reset_email_service(
    email_service: EmailService = Depends(get_email_service),
) -> IPasswordResetEmailService:
    return PasswordResetEmailService(email_service)


@lru_cache(maxsize=1)
def get_rate_limiter() -> RateLimiter:
    """Quota engine shared by every request of this process."""
    return RateLimiter(InMemoryRateLimitStore())


@lru_cache(maxsize=1)
def get_login_delay() -> ProgressiveLoginDelay:
    """Failed-login tracker shared by every request of this process."""
    return ProgressiveLoginDelay(InMemoryFailedLoginStore())


# ---------------------------------------------------------------------------
# Domain Service Dependencies
# ---------------------------------------------------------------------------


def get_user_registration_service(
    user_repository: IUserRepository = Depends(get_user_repository),
) -> UserRegistrationService:
    return UserRegistrationService(user_repository)


def get_user_authentication_service(
    user_repository: IUserRepository = Depends(get_user_repository),
) -> UserAuthenticationService:
    return UserAuthenticationService(user_repository)


def get_password_reset_token_service(
    token_repository: IResetTokenRepository = Depends(get_reset_token_repository),
    email_service: IPasswordResetEmailService = Depends(get_password_reset_email_service),
) -> PasswordResetTokenService:
    return PasswordResetTokenService(token_repository, email_service)


def get_password_reset_request_service(
    user_repository: IUserRepository = Depends(get_user_repository),
    token_service: PasswordResetTokenService = Depends(get_password_reset_token_service),
) -> PasswordResetRequestService:
    """Factory for the "forgot password" step.

    Args:
        user_repository: Looks up the account by email
        token_service: Issues and mails the reset token
    """
    return PasswordResetRequestService(user_repository, token_service)


def get_password_reset_service(
    user_repository: IUserRepository = Depends(get_user_repository),
    token_repository: IResetTokenRepository = Depends(get_reset_token_repository),
) -> PasswordResetService:
    return PasswordResetService(user_repository, token_repository)
