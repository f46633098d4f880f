import os

# Settings are read once at import time, so the test environment must be in
# place before anything from ``src`` is imported.
os.environ["APP_ENV"] = "test"
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_JSON", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.core.application import create_application
from src.core.config.settings import settings
from src.domain.rate_limiting import ProgressiveLoginDelay, RateLimiter
from src.infrastructure.dependency_injection.auth_dependencies import (
    get_email_service,
    get_login_delay,
    get_rate_limiter,
    get_reset_token_repository,
    get_user_repository,
)
from src.infrastructure.repositories import InMemoryFailedLoginStore, InMemoryRateLimitStore
from src.infrastructure.services import EmailService
from tests.utils.fakes import InMemoryResetTokenRepository, InMemoryUserRepository, ManualClock


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def rate_limit_store() -> InMemoryRateLimitStore:
    return InMemoryRateLimitStore()


@pytest.fixture
def failed_login_store() -> InMemoryFailedLoginStore:
    return InMemoryFailedLoginStore()


@pytest.fixture
def rate_limiter(rate_limit_store, clock) -> RateLimiter:
    return RateLimiter(rate_limit_store, clock)


@pytest.fixture
def login_delay(failed_login_store, clock) -> ProgressiveLoginDelay:
    return ProgressiveLoginDelay(failed_login_store, clock)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def token_repository() -> InMemoryResetTokenRepository:
    return InMemoryResetTokenRepository()


@pytest.fixture
def email_service() -> EmailService:
    """Real email service in test mode; sent messages are captured in memory."""
    assert settings.EMAIL_TEST_MODE
    return EmailService(settings)


@pytest.fixture
def app(rate_limiter, login_delay, user_repository, token_repository, email_service):
    """Application wired to in-memory collaborators and a manual clock."""
    application = create_application()
    application.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    application.dependency_overrides[get_login_delay] = lambda: login_delay
    application.dependency_overrides[get_user_repository] = lambda: user_repository
    application.dependency_overrides[get_reset_token_repository] = lambda: token_repository
    application.dependency_overrides[get_email_service] = lambda: email_service
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
