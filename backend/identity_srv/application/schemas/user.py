"""Wire records for user profiles."""

from pydantic import BaseModel, Field

from .base import PageRequest, PageResponse


class UserProfileSchema(BaseModel):
    """A user as returned to clients; the password hash never leaves the service."""

    id: str | None = None
    username: str | None = None
    email: str | None = None
    phone: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    real_name: str | None = None
    gender: int | None = None
    professional_title: str | None = None
    license_number: str | None = None
    specialties: list[str] | None = None
    employee_id: str | None = None
    status: int | None = None
    login_attempts: int | None = None
    must_change_password: bool | None = None
    is_system_user: bool | None = None
    account_expiry: int | None = None
    created_by: str | None = None
    updated_by: str | None = None
    last_login_time: int | None = None
    version: int | None = None
    created_at: int | None = None
    updated_at: int | None = None


class CreateUserRequest(BaseModel):
    username: str | None = Field(None, examples=["jdoe"])
    password: str | None = None
    email: str | None = None
    phone: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    real_name: str | None = None
    gender: int | None = None
    professional_title: str | None = None
    license_number: str | None = None
    specialties: list[str] | None = None
    employee_id: str | None = None
    must_change_password: bool | None = None
    account_expiry: int | None = None
    operator_id: str | None = None


class UpdateUserRequest(BaseModel):
    """All fields optional; absent fields keep their current value."""

    user_id: str | None = None
    email: str | None = None
    phone: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    real_name: str | None = None
    gender: int | None = None
    professional_title: str | None = None
    license_number: str | None = None
    specialties: list[str] | None = None
    employee_id: str | None = None
    account_expiry: int | None = None
    operator_id: str | None = None


class ListUsersRequest(BaseModel):
    page: PageRequest | None = None
    organization_id: str | None = None
    status: int | None = None


class SearchUsersRequest(BaseModel):
    search_term: str | None = None
    page: PageRequest | None = None


class UserListResponse(BaseModel):
    users: list[UserProfileSchema] = Field(default_factory=list)
    page: PageResponse


class ChangeUserStatusRequest(BaseModel):
    user_id: str | None = None
    new_status: int | None = None
    reason: str | None = None
    operator_id: str | None = None


class UnlockUserRequest(BaseModel):
    user_id: str | None = None
    operator_id: str | None = None
