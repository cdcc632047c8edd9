"""User ↔ role assignment endpoints."""

from fastapi import APIRouter, Depends, Query, status

from identity_srv.application.schemas import (
    AssignRoleToUserRequest,
    BatchBindUsersToRoleRequest,
    BatchBindUsersToRoleResponse,
    BatchGetUserRolesRequest,
    BatchGetUserRolesResponse,
    GetUsersByRoleResponse,
    PageRequest,
    RevokeRoleFromUserRequest,
    UpdateUserRoleAssignmentRequest,
    UserRoleAssignmentSchema,
    UserRoleListResponse,
    UserRoleQueryRequest,
)
from identity_srv.application.services import RoleAssignmentService
from identity_srv.infrastructure.dependencies import get_role_assignment_service
from identity_srv.presentation.api.v1.endpoints.paging import page_request

router = APIRouter(prefix="/role-assignments", tags=["Role Assignments"])


@router.get("", response_model=UserRoleListResponse)
async def list_user_role_assignments(
    user_id: str | None = Query(None),
    role_id: str | None = Query(None),
    page: PageRequest = Depends(page_request),
    service: RoleAssignmentService = Depends(get_role_assignment_service),
) -> UserRoleListResponse:
    return await service.list_user_role_assignments(
        UserRoleQueryRequest(user_id=user_id, role_id=role_id, page=page)
    )


@router.post("", response_model=UserRoleAssignmentSchema, status_code=status.HTTP_201_CREATED)
async def assign_role_to_user(
    data: AssignRoleToUserRequest,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
) -> UserRoleAssignmentSchema:
    return await service.assign_role_to_user(data)


@router.put("/{assignment_id}", response_model=UserRoleAssignmentSchema)
async def update_user_role_assignment(
    assignment_id: str,
    data: UpdateUserRoleAssignmentRequest,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
) -> UserRoleAssignmentSchema:
    return await service.update_user_role_assignment(
        data.model_copy(update={"assignment_id": assignment_id})
    )


@router.post("/revoke", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_role_from_user(
    data: RevokeRoleFromUserRequest,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
) -> None:
    await service.revoke_role_from_user(data)


@router.get("/users/{user_id}/last", response_model=UserRoleAssignmentSchema)
async def get_last_user_role_assignment(
    user_id: str,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
) -> UserRoleAssignmentSchema:
    return await service.get_last_user_role_assignment(user_id)


@router.get("/roles/{role_id}/users", response_model=GetUsersByRoleResponse)
async def get_users_by_role(
    role_id: str,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
) -> GetUsersByRoleResponse:
    return await service.get_users_by_role(role_id)


@router.put("/roles/{role_id}/users", response_model=BatchBindUsersToRoleResponse)
async def batch_bind_users_to_role(
    role_id: str,
    data: BatchBindUsersToRoleRequest,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
) -> BatchBindUsersToRoleResponse:
    """Replace the holders of a role with exactly the given users."""
    return await service.batch_bind_users_to_role(data.model_copy(update={"role_id": role_id}))


@router.post("/batch-user-roles", response_model=BatchGetUserRolesResponse)
async def batch_get_user_roles(
    data: BatchGetUserRolesRequest,
    service: RoleAssignmentService = Depends(get_role_assignment_service),
) -> BatchGetUserRolesResponse:
    return await service.batch_get_user_roles(data)
