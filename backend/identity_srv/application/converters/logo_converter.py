"""Projection between ``OrganizationLogo`` and its wire records."""

from uuid import UUID, uuid4

from identity_srv.application.converters.enum_converter import EnumConverter
from identity_srv.application.converters.identifiers import format_id, parse_id
from identity_srv.application.converters.value_boxing import box_string, unbox_string
from identity_srv.application.schemas.logo import (
    OrganizationLogoSchema,
    UploadTemporaryLogoRequest,
)
from identity_srv.domain.entities.common import now_millis
from identity_srv.domain.entities.enums import LogoStatus
from identity_srv.domain.entities.organization import OrganizationLogo


class LogoConverter:

    def __init__(self, enum_converter: EnumConverter):
        self._enums = enum_converter

    def model_to_wire(
        self, logo: OrganizationLogo | None, download_url: str | None = None
    ) -> OrganizationLogoSchema | None:
        if logo is None:
            return None
        return OrganizationLogoSchema(
            id=format_id(logo.id),
            status=self._enums.logo_status_to_wire(logo.status),
            bound_organization_id=format_id(logo.bound_organization_id),
            file_id=box_string(logo.file_id),
            file_name=box_string(logo.file_name),
            file_size=logo.file_size,
            mime_type=box_string(logo.mime_type),
            expires_at=logo.expires_at,
            uploaded_by=format_id(logo.uploaded_by),
            download_url=download_url,
            created_at=logo.created_at,
            updated_at=logo.updated_at,
        )

    def upload_request_to_model(
        self,
        request: UploadTemporaryLogoRequest,
        file_id: str,
        expires_at: int,
    ) -> OrganizationLogo:
        """Build a temporary logo record for a freshly stored file."""
        now = now_millis()
        return OrganizationLogo(
            id=uuid4(),
            file_id=file_id,
            file_name=unbox_string(request.file_name),
            file_size=len(request.file_content or b""),
            mime_type=unbox_string(request.mime_type),
            status=LogoStatus.TEMPORARY,
            expires_at=expires_at,
            uploaded_by=parse_id(request.uploaded_by),
            created_at=now,
            updated_at=now,
        )

    def bind(self, logo: OrganizationLogo, organization_id: UUID) -> OrganizationLogo:
        logo.bind_to_organization(organization_id)
        return logo
