"""
Client Endpoints

Anonymous password reminder and reset for clients.
"""

import logging

from fastapi import APIRouter, Depends, status

from taskdesk.api.deps import get_password_reset_service
from taskdesk.schemas.client import (
    ClientResponse,
    ErrorResponse,
    MessageResponse,
    RemindPasswordRequest,
    ResetPasswordRequest,
    ValidationErrorResponse,
)
from taskdesk.services.password_reset_service import PasswordResetService

logger = logging.getLogger(__name__)

# ============================================================
# Router Setup
# ============================================================

router = APIRouter(tags=["Clients"])


# ============================================================
# Remind Password Endpoint
# ============================================================

@router.post(
    "/remind_password",
    response_model=ClientResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Reset link emailed"},
        400: {"model": ErrorResponse, "description": "Malformed JSON body"},
        422: {"model": ValidationErrorResponse, "description": "User not found"},
        500: {"model": ErrorResponse, "description": "Storage or email failure"},
    }
)
async def remind_password(
    request_data: RemindPasswordRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
):
    """
    Email a password reset link to a client.

    - **username**: The client's email address

    Open to anonymous callers. The reset token is only delivered by email
    and is not part of the response.
    """
    return await service.remind_password(request_data.username)


# ============================================================
# Reset Password Endpoint
# ============================================================

@router.post(
    "/reset_password",
    response_model=MessageResponse,
    responses={
        200: {"description": "Password changed"},
        422: {"model": ValidationErrorResponse, "description": "Invalid or expired token"},
    }
)
async def reset_password(
    request_data: ResetPasswordRequest,
    service: PasswordResetService = Depends(get_password_reset_service),
):
    """
    Set a new password using the token from the reset link.

    The token is single-use: it is cleared once the password is changed.
    """
    await service.reset_password(request_data.token, request_data.password)

    return MessageResponse(
        message="Password has been reset successfully. You can now log in with your new password.",
        success=True
    )
