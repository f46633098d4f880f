"""Forgot Password endpoint.

Every well-formed request gets the same answer, so the response never tells
whether an email address has an account. Malformed requests use up the
client's password reset quota.
"""

import structlog
from fastapi import APIRouter, Depends, Request, status

from src.adapters.api.v1.auth.schemas import ForgotPasswordRequest, MessageResponse
from src.adapters.api.v1.auth.utils import parse_body
from src.core.exceptions import InternalServerError, ValidationError
from src.core.rate_limiting import get_client_identity, rate_limit_response
from src.domain.rate_limiting import PASSWORD_RESET_RATE_LIMIT, RateLimiter
from src.domain.services.password_reset import PasswordResetRequestService
from src.infrastructure.dependency_injection.auth_dependencies import (
    get_password_reset_request_service,
    get_rate_limiter,
)

logger = structlog.get_logger(__name__)
router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If your email is registered, you will receive a password reset link."


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Request password reset",
    responses={
        400: {"description": "Invalid input"},
        429: {"description": "Password reset quota exhausted"},
        500: {"description": "Reset email could not be sent"},
    },
)
async def forgot_password(
    request: Request,
    identity: str = Depends(get_client_identity),
    limiter: RateLimiter = Depends(get_rate_limiter),
    password_reset_service: PasswordResetRequestService = Depends(get_password_reset_request_service),
):
    rejection = rate_limit_response(request, limiter, PASSWORD_RESET_RATE_LIMIT, identity=identity)
    if rejection is not None:
        return rejection

    request_logger = logger.bind(client_ip=identity, endpoint="forgot_password")

    try:
        payload = await parse_body(request, ForgotPasswordRequest)
        await password_reset_service.request_password_reset(payload.email)
    except ValidationError as e:
        limiter.update(identity, PASSWORD_RESET_RATE_LIMIT, success=False)
        request_logger.info("Password reset request rejected", error_code=e.code)
        raise
    except Exception as e:
        request_logger.error("Password reset request failed", error=str(e))
        raise InternalServerError("Failed to process password reset request") from e

    limiter.update(identity, PASSWORD_RESET_RATE_LIMIT, success=True)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)
