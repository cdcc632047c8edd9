"""Wire records for organizations."""

from pydantic import BaseModel, Field

from .base import PageRequest, PageResponse


class OrganizationSchema(BaseModel):
    id: str | None = None
    code: str | None = None
    name: str | None = None
    parent_id: str | None = None
    facility_type: str | None = None
    accreditation_status: str | None = None
    province_city: list[str] | None = None
    logo: str | None = None
    logo_id: str | None = None
    created_at: int | None = None
    updated_at: int | None = None


class CreateOrganizationRequest(BaseModel):
    name: str | None = Field(None, examples=["Central Hospital"])
    code: str | None = None
    parent_id: str | None = None
    facility_type: str | None = None
    accreditation_status: str | None = None
    province_city: list[str] | None = None
    logo_id: str | None = None


class UpdateOrganizationRequest(BaseModel):
    organization_id: str | None = None
    name: str | None = None
    parent_id: str | None = None
    facility_type: str | None = None
    accreditation_status: str | None = None
    province_city: list[str] | None = None
    logo_id: str | None = None


class ListOrganizationsRequest(BaseModel):
    page: PageRequest | None = None
    parent_id: str | None = None


class OrganizationListResponse(BaseModel):
    organizations: list[OrganizationSchema] = Field(default_factory=list)
    page: PageResponse
