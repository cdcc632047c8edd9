"""Wire records for permissions, role definitions and role assignments."""

from pydantic import BaseModel, Field

from .base import PageRequest, PageResponse


class PermissionSchema(BaseModel):
    resource: str | None = None
    action: str | None = None
    description: str | None = None


class RoleDefinitionSchema(BaseModel):
    id: str | None = None
    name: str | None = None
    description: str | None = None
    status: int | None = None
    permissions: list[PermissionSchema] = Field(default_factory=list)
    is_system_role: bool | None = None
    created_by: str | None = None
    updated_by: str | None = None
    created_at: int | None = None
    updated_at: int | None = None
    user_count: int | None = None


class RoleDefinitionCreateRequest(BaseModel):
    name: str | None = Field(None, examples=["auditor"])
    description: str | None = None
    status: int | None = None
    permissions: list[PermissionSchema] | None = None
    is_system_role: bool | None = None
    operator_id: str | None = None


class RoleDefinitionUpdateRequest(BaseModel):
    role_definition_id: str | None = None
    name: str | None = None
    description: str | None = None
    status: int | None = None
    permissions: list[PermissionSchema] | None = None
    operator_id: str | None = None


class RoleDefinitionQueryRequest(BaseModel):
    page: PageRequest | None = None
    name: str | None = None
    status: int | None = None
    is_system_role: bool | None = None


class RoleDefinitionListResponse(BaseModel):
    roles: list[RoleDefinitionSchema] = Field(default_factory=list)
    page: PageResponse


class UserRoleAssignmentSchema(BaseModel):
    id: str | None = None
    user_id: str | None = None
    role_id: str | None = None
    created_by: str | None = None
    updated_by: str | None = None
    created_at: int | None = None
    updated_at: int | None = None


class AssignRoleToUserRequest(BaseModel):
    user_id: str | None = None
    role_id: str | None = None
    operator_id: str | None = None


class UpdateUserRoleAssignmentRequest(BaseModel):
    assignment_id: str | None = None
    user_id: str | None = None
    role_id: str | None = None
    operator_id: str | None = None


class RevokeRoleFromUserRequest(BaseModel):
    user_id: str | None = None
    role_id: str | None = None


class UserRoleQueryRequest(BaseModel):
    user_id: str | None = None
    role_id: str | None = None
    page: PageRequest | None = None


class UserRoleListResponse(BaseModel):
    assignments: list[UserRoleAssignmentSchema] = Field(default_factory=list)
    page: PageResponse


class GetUsersByRoleResponse(BaseModel):
    role_id: str
    user_ids: list[str] = Field(default_factory=list)


class BatchBindUsersToRoleRequest(BaseModel):
    role_id: str | None = None
    user_ids: list[str] = Field(default_factory=list)
    operator_id: str | None = None


class BatchBindUsersToRoleResponse(BaseModel):
    success: bool = True
    success_count: int = 0
    message: str | None = None


class BatchGetUserRolesRequest(BaseModel):
    user_ids: list[str] = Field(default_factory=list)


class UserRolesSchema(BaseModel):
    user_id: str
    role_ids: list[str] = Field(default_factory=list)


class BatchGetUserRolesResponse(BaseModel):
    user_roles: list[UserRolesSchema] = Field(default_factory=list)
