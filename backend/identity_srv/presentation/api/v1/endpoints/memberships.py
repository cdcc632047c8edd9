"""User membership endpoints."""

from fastapi import APIRouter, Depends, Query, status

from identity_srv.application.schemas import (
    AddMembershipRequest,
    CheckMembershipRequest,
    CheckMembershipResponse,
    GetUserMembershipsRequest,
    MembershipListResponse,
    PageRequest,
    UpdateMembershipRequest,
    UserMembershipSchema,
)
from identity_srv.application.services import MembershipService
from identity_srv.infrastructure.dependencies import get_membership_service
from identity_srv.presentation.api.v1.endpoints.paging import page_request

router = APIRouter(prefix="/memberships", tags=["Memberships"])


@router.get("", response_model=MembershipListResponse)
async def get_user_memberships(
    user_id: str | None = Query(None),
    organization_id: str | None = Query(None),
    page: PageRequest = Depends(page_request),
    service: MembershipService = Depends(get_membership_service),
) -> MembershipListResponse:
    return await service.get_user_memberships(
        GetUserMembershipsRequest(user_id=user_id, organization_id=organization_id, page=page)
    )


@router.get("/primary/{user_id}", response_model=UserMembershipSchema)
async def get_primary_membership(
    user_id: str,
    service: MembershipService = Depends(get_membership_service),
) -> UserMembershipSchema:
    return await service.get_primary_membership(user_id)


@router.post("/check", response_model=CheckMembershipResponse)
async def check_membership(
    data: CheckMembershipRequest,
    service: MembershipService = Depends(get_membership_service),
) -> CheckMembershipResponse:
    """Whether the user currently belongs to the organization (and department)."""
    return await service.check_membership(data)


@router.get("/{membership_id}", response_model=UserMembershipSchema)
async def get_membership(
    membership_id: str,
    service: MembershipService = Depends(get_membership_service),
) -> UserMembershipSchema:
    return await service.get_membership(membership_id)


@router.post("", response_model=UserMembershipSchema, status_code=status.HTTP_201_CREATED)
async def add_membership(
    data: AddMembershipRequest,
    service: MembershipService = Depends(get_membership_service),
) -> UserMembershipSchema:
    return await service.add_membership(data)


@router.put("/{membership_id}", response_model=UserMembershipSchema)
async def update_membership(
    membership_id: str,
    data: UpdateMembershipRequest,
    service: MembershipService = Depends(get_membership_service),
) -> UserMembershipSchema:
    return await service.update_membership(
        data.model_copy(update={"membership_id": membership_id})
    )


@router.delete("/{membership_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_membership(
    membership_id: str,
    service: MembershipService = Depends(get_membership_service),
) -> None:
    await service.remove_membership(membership_id)
