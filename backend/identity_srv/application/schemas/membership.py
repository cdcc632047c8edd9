"""Wire records for user memberships."""

from pydantic import BaseModel, Field

from .base import PageRequest, PageResponse


class UserMembershipSchema(BaseModel):
    id: str | None = None
    user_id: str | None = None
    organization_id: str | None = None
    department_id: str | None = None
    status: int | None = None
    is_primary: bool | None = None
    valid_from: int | None = None
    valid_to: int | None = None
    created_by: str | None = None
    updated_by: str | None = None
    created_at: int | None = None
    updated_at: int | None = None


class AddMembershipRequest(BaseModel):
    user_id: str | None = None
    organization_id: str | None = None
    department_id: str | None = None
    is_primary: bool | None = None
    valid_from: int | None = None
    valid_to: int | None = None
    operator_id: str | None = None


class UpdateMembershipRequest(BaseModel):
    membership_id: str | None = None
    organization_id: str | None = None
    department_id: str | None = None
    status: int | None = None
    is_primary: bool | None = None
    valid_from: int | None = None
    valid_to: int | None = None
    operator_id: str | None = None


class GetUserMembershipsRequest(BaseModel):
    user_id: str | None = None
    organization_id: str | None = None
    page: PageRequest | None = None


class MembershipListResponse(BaseModel):
    memberships: list[UserMembershipSchema] = Field(default_factory=list)
    page: PageResponse


class CheckMembershipRequest(BaseModel):
    user_id: str | None = None
    organization_id: str | None = None
    department_id: str | None = None


class CheckMembershipResponse(BaseModel):
    is_member: bool = False
