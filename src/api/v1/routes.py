"""
API v1 routes.

Defines REST endpoints for the account registration API.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_registration_service
from src.api.models import ErrorResponse, RegisterRequest, RegisterResponse
from src.domain.exceptions import IdentifierConflict, NotificationFailure, PersistenceFailure
from src.domain.models import RegistrationRequest
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["v1"])


@router.post(
    "/users",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Username or email already registered"},
        422: {"description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Registration could not be completed"},
    },
    summary="Register a new user",
    description="Create an account and send a verification link to the provided email.",
)
async def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a new user and send the verification email.

    - **username**: 3 to 50 characters, unique
    - **email**: Valid email address, unique
    - **password**: 8+ characters with upper, lower and digit

    Conflicts return the machine-readable code (USERNAME_EXISTS / EMAIL_EXISTS).
    """
    try:
        account = await service.register(
            RegistrationRequest(
                username=request_data.username,
                email=request_data.email,
                plaintext_password=request_data.password,
            )
        )
    except IdentifierConflict as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.code) from None
    except (PersistenceFailure, NotificationFailure) as e:
        logger.error("Registration failed: %s", e.code)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="REGISTRATION_FAILED",
        ) from None

    return RegisterResponse(
        message="Verification email sent",
        id=account.id,
        username=account.username,
        email=account.email,
    )
