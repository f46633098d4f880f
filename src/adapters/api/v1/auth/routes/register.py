"""Registration endpoint.

Flow: quota guard, body validation, account creation, quota bookkeeping.
Rejected registrations (bad input, weak password, taken email) use up the
client's registration quota; successful ones do not.
"""

import structlog
from fastapi import APIRouter, Depends, Request, status

from src.adapters.api.v1.auth.schemas import RegisterRequest, RegisterResponse
from src.adapters.api.v1.auth.utils import parse_body
from src.core.exceptions import ConflictError, InternalServerError, ValidationError
from src.core.rate_limiting import get_client_identity, rate_limit_response
from src.domain.rate_limiting import REGISTRATION_RATE_LIMIT, RateLimiter
from src.domain.services.authentication import UserRegistrationService
from src.infrastructure.dependency_injection.auth_dependencies import (
    get_rate_limiter,
    get_user_registration_service,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"description": "Invalid input or password too weak"},
        409: {"description": "Email already registered"},
        429: {"description": "Registration quota exhausted"},
    },
)
async def register_user(
    request: Request,
    identity: str = Depends(get_client_identity),
    limiter: RateLimiter = Depends(get_rate_limiter),
    registration_service: UserRegistrationService = Depends(get_user_registration_service),
):
    """Create an account from ``{name, email, password}``.

    Returns:
        RegisterResponse: The new user's public fields

    Raises:
        ValidationError: Malformed body (400)
        PasswordPolicyError: Weak password, every violation listed (400)
        DuplicateUserError: Email already registered (409)
        InternalServerError: Anything unexpected (500)
    """
    rejection = rate_limit_response(request, limiter, REGISTRATION_RATE_LIMIT, identity=identity)
    if rejection is not None:
        return rejection

    request_logger = logger.bind(client_ip=identity, endpoint="register")

    try:
        payload = await parse_body(request, RegisterRequest)
        user = await registration_service.register_user(
            name=payload.name,
            email=payload.email,
            password=payload.password,
        )
    except (ValidationError, ConflictError) as e:
        limiter.update(identity, REGISTRATION_RATE_LIMIT, success=False)
        request_logger.info("Registration rejected", error_code=e.code)
        raise
    except Exception as e:
        request_logger.error("Registration failed unexpectedly", error=str(e))
        raise InternalServerError("Failed to register user") from e

    limiter.update(identity, REGISTRATION_RATE_LIMIT, success=True)
    request_logger.info("Registration succeeded", user_id=user.id)
    return RegisterResponse.for_user(user)
