"""Wire records for organization logos."""

from pydantic import BaseModel


class OrganizationLogoSchema(BaseModel):
    id: str | None = None
    status: int | None = None
    bound_organization_id: str | None = None
    file_id: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    mime_type: str | None = None
    expires_at: int | None = None
    uploaded_by: str | None = None
    download_url: str | None = None
    created_at: int | None = None
    updated_at: int | None = None


class UploadTemporaryLogoRequest(BaseModel):
    file_content: bytes | None = None
    file_name: str | None = None
    mime_type: str | None = None
    uploaded_by: str | None = None


class BindLogoToOrganizationRequest(BaseModel):
    logo_id: str | None = None
    organization_id: str | None = None
