"""Authentication and password management endpoints."""

from fastapi import APIRouter, Depends

from identity_srv.application.schemas import (
    ChangePasswordRequest,
    ForcePasswordChangeRequest,
    LoginRequest,
    LoginResponse,
    OperationStatusResponse,
    ResetPasswordRequest,
)
from identity_srv.application.services import AuthenticationService
from identity_srv.infrastructure.dependencies import get_authentication_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    service: AuthenticationService = Depends(get_authentication_service),
) -> LoginResponse:
    """Verify credentials and return profile, memberships, roles and menus."""
    return await service.login(data)


@router.post("/change-password", response_model=OperationStatusResponse)
async def change_password(
    data: ChangePasswordRequest,
    service: AuthenticationService = Depends(get_authentication_service),
) -> OperationStatusResponse:
    return await service.change_password(data)


@router.post("/reset-password", response_model=OperationStatusResponse)
async def reset_password(
    data: ResetPasswordRequest,
    service: AuthenticationService = Depends(get_authentication_service),
) -> OperationStatusResponse:
    """Administrative reset; the user must change the password on next login."""
    return await service.reset_password(data)


@router.post("/force-password-change", response_model=OperationStatusResponse)
async def force_password_change(
    data: ForcePasswordChangeRequest,
    service: AuthenticationService = Depends(get_authentication_service),
) -> OperationStatusResponse:
    return await service.force_password_change(data)
