"""Wire records for authentication and password management."""

from pydantic import BaseModel, Field

from .membership import UserMembershipSchema
from .menu import MenuNodeSchema
from .user import UserProfileSchema


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    user_profile: UserProfileSchema | None = None
    memberships: list[UserMembershipSchema] = Field(default_factory=list)
    menu_tree: list[MenuNodeSchema] = Field(default_factory=list)
    role_ids: list[str] = Field(default_factory=list)


class ChangePasswordRequest(BaseModel):
    user_id: str | None = None
    old_password: str | None = None
    new_password: str | None = None


class ResetPasswordRequest(BaseModel):
    user_id: str | None = None
    new_password: str | None = None
    operator_id: str | None = None


class ForcePasswordChangeRequest(BaseModel):
    user_id: str | None = None
    operator_id: str | None = None
