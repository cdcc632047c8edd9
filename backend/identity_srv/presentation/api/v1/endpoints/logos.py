"""Organization logo endpoints — temporary upload, binding and removal."""

from fastapi import APIRouter, Depends, Form, UploadFile, status

from identity_srv.application.schemas import (
    BindLogoToOrganizationRequest,
    OrganizationLogoSchema,
    UploadTemporaryLogoRequest,
)
from identity_srv.application.services import LogoService
from identity_srv.infrastructure.dependencies import get_logo_service

router = APIRouter(prefix="/logos", tags=["Logos"])


@router.post("", response_model=OrganizationLogoSchema, status_code=status.HTTP_201_CREATED)
async def upload_temporary_logo(
    file: UploadFile,
    uploaded_by: str | None = Form(None),
    service: LogoService = Depends(get_logo_service),
) -> OrganizationLogoSchema:
    """Upload a logo; it expires unless bound to an organization in time."""
    content = await file.read()
    return await service.upload_temporary_logo(
        UploadTemporaryLogoRequest(
            file_content=content,
            file_name=file.filename,
            mime_type=file.content_type,
            uploaded_by=uploaded_by,
        )
    )


@router.get("/{logo_id}", response_model=OrganizationLogoSchema)
async def get_organization_logo(
    logo_id: str,
    service: LogoService = Depends(get_logo_service),
) -> OrganizationLogoSchema:
    return await service.get_organization_logo(logo_id)


@router.post("/{logo_id}/bind", response_model=OrganizationLogoSchema)
async def bind_logo_to_organization(
    logo_id: str,
    data: BindLogoToOrganizationRequest,
    service: LogoService = Depends(get_logo_service),
) -> OrganizationLogoSchema:
    return await service.bind_logo_to_organization(data.model_copy(update={"logo_id": logo_id}))


@router.delete("/{logo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_organization_logo(
    logo_id: str,
    service: LogoService = Depends(get_logo_service),
) -> None:
    await service.delete_organization_logo(logo_id)
