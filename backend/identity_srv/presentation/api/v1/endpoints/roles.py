"""Role definition endpoints."""

from fastapi import APIRouter, Depends, Query, status

from identity_srv.application.schemas import (
    PageRequest,
    RoleDefinitionCreateRequest,
    RoleDefinitionListResponse,
    RoleDefinitionQueryRequest,
    RoleDefinitionSchema,
    RoleDefinitionUpdateRequest,
)
from identity_srv.application.services import RoleDefinitionService
from identity_srv.infrastructure.dependencies import get_role_definition_service
from identity_srv.presentation.api.v1.endpoints.paging import page_request

router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get("", response_model=RoleDefinitionListResponse)
async def list_role_definitions(
    name: str | None = Query(None),
    role_status: int | None = Query(None, alias="status"),
    is_system_role: bool | None = Query(None),
    page: PageRequest = Depends(page_request),
    service: RoleDefinitionService = Depends(get_role_definition_service),
) -> RoleDefinitionListResponse:
    return await service.list_role_definitions(
        RoleDefinitionQueryRequest(
            page=page, name=name, status=role_status, is_system_role=is_system_role
        )
    )


@router.get("/{role_id}", response_model=RoleDefinitionSchema)
async def get_role_definition(
    role_id: str,
    service: RoleDefinitionService = Depends(get_role_definition_service),
) -> RoleDefinitionSchema:
    return await service.get_role_definition(role_id)


@router.post("", response_model=RoleDefinitionSchema, status_code=status.HTTP_201_CREATED)
async def create_role_definition(
    data: RoleDefinitionCreateRequest,
    service: RoleDefinitionService = Depends(get_role_definition_service),
) -> RoleDefinitionSchema:
    return await service.create_role_definition(data)


@router.put("/{role_id}", response_model=RoleDefinitionSchema)
async def update_role_definition(
    role_id: str,
    data: RoleDefinitionUpdateRequest,
    service: RoleDefinitionService = Depends(get_role_definition_service),
) -> RoleDefinitionSchema:
    return await service.update_role_definition(
        data.model_copy(update={"role_definition_id": role_id})
    )


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role_definition(
    role_id: str,
    service: RoleDefinitionService = Depends(get_role_definition_service),
) -> None:
    """Delete a role; system roles and roles still held by users are refused."""
    await service.delete_role_definition(role_id)
