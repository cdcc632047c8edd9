"""Wire records for departments."""

from pydantic import BaseModel, Field

from .base import PageRequest, PageResponse


class DepartmentSchema(BaseModel):
    id: str | None = None
    name: str | None = None
    organization_id: str | None = None
    department_type: str | None = None
    available_equipment: list[str] | None = None
    created_at: int | None = None
    updated_at: int | None = None


class CreateDepartmentRequest(BaseModel):
    name: str | None = Field(None, examples=["Radiology"])
    organization_id: str | None = None
    department_type: str | None = None
    available_equipment: list[str] | None = None


class UpdateDepartmentRequest(BaseModel):
    department_id: str | None = None
    name: str | None = None
    department_type: str | None = None
    available_equipment: list[str] | None = None


class GetOrganizationDepartmentsRequest(BaseModel):
    organization_id: str | None = None
    page: PageRequest | None = None


class DepartmentListResponse(BaseModel):
    departments: list[DepartmentSchema] = Field(default_factory=list)
    page: PageResponse
