"""User account endpoints."""

from fastapi import APIRouter, Depends, Query, status

from identity_srv.application.schemas import (
    ChangeUserStatusRequest,
    CreateUserRequest,
    ListUsersRequest,
    PageRequest,
    SearchUsersRequest,
    UnlockUserRequest,
    UpdateUserRequest,
    UserListResponse,
    UserProfileSchema,
)
from identity_srv.application.services import UserProfileService
from identity_srv.infrastructure.dependencies import get_user_profile_service
from identity_srv.presentation.api.v1.endpoints.paging import page_request

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListResponse)
async def list_users(
    organization_id: str | None = Query(None),
    user_status: int | None = Query(None, alias="status"),
    page: PageRequest = Depends(page_request),
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserListResponse:
    """List users, optionally restricted to an organization's members or a status."""
    return await service.list_users(
        ListUsersRequest(page=page, organization_id=organization_id, status=user_status)
    )


@router.get("/search", response_model=UserListResponse)
async def search_users(
    q: str | None = Query(None, description="Matched against username, name, email, phone"),
    page: PageRequest = Depends(page_request),
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserListResponse:
    return await service.search_users(SearchUsersRequest(search_term=q, page=page))


@router.get("/{user_id}", response_model=UserProfileSchema)
async def get_user(
    user_id: str,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileSchema:
    return await service.get_user(user_id)


@router.post("", response_model=UserProfileSchema, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: CreateUserRequest,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileSchema:
    return await service.create_user(data)


@router.put("/{user_id}", response_model=UserProfileSchema)
async def update_user(
    user_id: str,
    data: UpdateUserRequest,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileSchema:
    return await service.update_user(data.model_copy(update={"user_id": user_id}))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    service: UserProfileService = Depends(get_user_profile_service),
) -> None:
    await service.delete_user(user_id)


@router.post("/{user_id}/status", response_model=UserProfileSchema)
async def change_user_status(
    user_id: str,
    data: ChangeUserStatusRequest,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileSchema:
    return await service.change_user_status(data.model_copy(update={"user_id": user_id}))


@router.post("/{user_id}/unlock", response_model=UserProfileSchema)
async def unlock_user(
    user_id: str,
    data: UnlockUserRequest | None = None,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileSchema:
    request = data or UnlockUserRequest()
    return await service.unlock_user(request.model_copy(update={"user_id": user_id}))
