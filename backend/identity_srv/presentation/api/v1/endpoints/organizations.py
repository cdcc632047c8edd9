"""Organization endpoints, including the departments of an organization."""

from fastapi import APIRouter, Depends, Query, status

from identity_srv.application.schemas import (
    CreateOrganizationRequest,
    DepartmentListResponse,
    GetOrganizationDepartmentsRequest,
    ListOrganizationsRequest,
    OrganizationListResponse,
    OrganizationSchema,
    PageRequest,
    UpdateOrganizationRequest,
)
from identity_srv.application.services import DepartmentService, OrganizationService
from identity_srv.infrastructure.dependencies import (
    get_department_service,
    get_organization_service,
)
from identity_srv.presentation.api.v1.endpoints.paging import page_request

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.get("", response_model=OrganizationListResponse)
async def list_organizations(
    parent_id: str | None = Query(None),
    page: PageRequest = Depends(page_request),
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationListResponse:
    return await service.list_organizations(
        ListOrganizationsRequest(page=page, parent_id=parent_id)
    )


@router.get("/{organization_id}", response_model=OrganizationSchema)
async def get_organization(
    organization_id: str,
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationSchema:
    return await service.get_organization(organization_id)


@router.post("", response_model=OrganizationSchema, status_code=status.HTTP_201_CREATED)
async def create_organization(
    data: CreateOrganizationRequest,
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationSchema:
    """Create an organization; the code is derived from the name when omitted."""
    return await service.create_organization(data)


@router.put("/{organization_id}", response_model=OrganizationSchema)
async def update_organization(
    organization_id: str,
    data: UpdateOrganizationRequest,
    service: OrganizationService = Depends(get_organization_service),
) -> OrganizationSchema:
    return await service.update_organization(
        data.model_copy(update={"organization_id": organization_id})
    )


@router.delete("/{organization_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_organization(
    organization_id: str,
    service: OrganizationService = Depends(get_organization_service),
) -> None:
    """Delete an organization without children, departments or members."""
    await service.delete_organization(organization_id)


@router.get("/{organization_id}/departments", response_model=DepartmentListResponse)
async def get_organization_departments(
    organization_id: str,
    page: PageRequest = Depends(page_request),
    service: DepartmentService = Depends(get_department_service),
) -> DepartmentListResponse:
    return await service.get_organization_departments(
        GetOrganizationDepartmentsRequest(organization_id=organization_id, page=page)
    )
