"""Reset Password endpoint.

Consumes a reset token and sets the new password. Every rejected attempt
(bad input, weak password, unknown or expired token, missing owner) uses up
the client's password reset quota, which bounds token guessing.
"""

import structlog
from fastapi import APIRouter, Depends, Request, status

from src.adapters.api.v1.auth.schemas import MessageResponse, ResetPasswordRequest
from src.adapters.api.v1.auth.utils import parse_body
from src.core.exceptions import (
    InternalServerError,
    NotFoundError,
    PasswordResetError,
    ValidationError,
)
from src.core.rate_limiting import get_client_identity, rate_limit_response
from src.domain.rate_limiting import PASSWORD_RESET_RATE_LIMIT, RateLimiter
from src.domain.services.password_reset import PasswordResetService
from src.infrastructure.dependency_injection.auth_dependencies import (
    get_password_reset_service,
    get_rate_limiter,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Reset password with token",
    responses={
        400: {"description": "Invalid input, weak password, or invalid/expired token"},
        404: {"description": "Token owner no longer exists"},
        429: {"description": "Password reset quota exhausted"},
    },
)
async def reset_password(
    request: Request,
    identity: str = Depends(get_client_identity),
    limiter: RateLimiter = Depends(get_rate_limiter),
    password_reset_service: PasswordResetService = Depends(get_password_reset_service),
):
    """Set a new password from ``{token, password, confirmPassword}``.

    Raises:
        ValidationError: Malformed body or mismatched confirmation (400)
        PasswordPolicyError: Weak password (400)
        InvalidResetTokenError: Unknown or already used token (400)
        ResetTokenExpiredError: Expired token, now deleted (400)
        UserNotFoundError: Token owner missing (404)
        InternalServerError: Anything unexpected (500)
    """
    rejection = rate_limit_response(request, limiter, PASSWORD_RESET_RATE_LIMIT, identity=identity)
    if rejection is not None:
        return rejection

    request_logger = logger.bind(client_ip=identity, endpoint="reset_password")

    try:
        payload = await parse_body(request, ResetPasswordRequest)
        user = await password_reset_service.reset_password(payload.token, payload.password)
    except (ValidationError, PasswordResetError, NotFoundError) as e:
        limiter.update(identity, PASSWORD_RESET_RATE_LIMIT, success=False)
        request_logger.info("Password reset rejected", error_code=e.code)
        raise
    except Exception as e:
        request_logger.error("Password reset failed", error=str(e))
        raise InternalServerError("Failed to reset password") from e

    limiter.update(identity, PASSWORD_RESET_RATE_LIMIT, success=True)
    request_logger.info("Password reset succeeded", user_id=user.id)
    return MessageResponse(message="Password has been reset successfully")
