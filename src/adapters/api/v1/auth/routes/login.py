"""Login endpoint with quota and progressive delay.

Flow: quota guard, delay guard, body validation, credential check,
bookkeeping. Every failed attempt, whatever its cause, extends the client's
cooldown and uses up login quota; a success forgives the failure streak.
"""

import structlog
from fastapi import APIRouter, Depends, Request, status

from src.adapters.api.v1.auth.schemas import LoginRequest, LoginResponse
from src.adapters.api.v1.auth.utils import parse_body
from src.core.exceptions import AuthenticationError, InternalServerError, ValidationError
from src.core.rate_limiting import get_client_identity, login_delay_response, rate_limit_response
from src.domain.rate_limiting import LOGIN_RATE_LIMIT, ProgressiveLoginDelay, RateLimiter
from src.domain.services.authentication import UserAuthenticationService
from src.infrastructure.dependency_injection.auth_dependencies import (
    get_login_delay,
    get_rate_limiter,
    get_user_authentication_service,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Validate user credentials",
    responses={
        400: {"description": "Invalid input"},
        401: {"description": "Invalid email or password"},
        429: {"description": "Login quota exhausted or cooldown running"},
    },
)
async def login_user(
    request: Request,
    identity: str = Depends(get_client_identity),
    limiter: RateLimiter = Depends(get_rate_limiter),
    delay: ProgressiveLoginDelay = Depends(get_login_delay),
    authentication_service: UserAuthenticationService = Depends(get_user_authentication_service),
):
    """Check ``{email, password}`` and return the user's public profile.

    Raises:
        ValidationError: Malformed body (400)
        InvalidCredentialsError: Unknown email or wrong password (401)
        InternalServerError: Anything unexpected (500)
    """
    rejection = rate_limit_response(request, limiter, LOGIN_RATE_LIMIT, identity=identity)
    if rejection is not None:
        return rejection

    rejection = login_delay_response(request, delay, identity=identity)
    if rejection is not None:
        return rejection

    request_logger = logger.bind(client_ip=identity, endpoint="login")

    try:
        payload = await parse_body(request, LoginRequest)
        user = await authentication_service.authenticate(payload.email, payload.password)
    except (ValidationError, AuthenticationError) as e:
        delay.record_failed_login(identity)
        limiter.update(identity, LOGIN_RATE_LIMIT, success=False)
        request_logger.info("Login rejected", error_code=e.code)
        raise
    except Exception as e:
        delay.record_failed_login(identity)
        limiter.update(identity, LOGIN_RATE_LIMIT, success=False)
        request_logger.error("Login failed unexpectedly", error=str(e))
        raise InternalServerError("Authentication failed") from e

    delay.clear_failed_logins(identity)
    limiter.update(identity, LOGIN_RATE_LIMIT, success=True)
    request_logger.info("Login succeeded", user_id=user.id)
    return LoginResponse.for_user(user)
