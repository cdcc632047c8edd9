"""Organization logo lifecycle: temporary upload, binding, lookup and deletion.

Uploaded logos start as TEMPORARY with an expiry; binding one to an
organization makes it permanent. An organization holds at most one bound
logo, so binding a new one retires the previous.
"""

import logging
from pathlib import Path
from uuid import UUID, uuid4

from identity_srv.application.converters import LogoConverter
from identity_srv.application.interfaces import (
    LogoStorage,
    OrganizationLogoRepository,
    OrganizationRepository,
)
from identity_srv.application.schemas.logo import (
    BindLogoToOrganizationRequest,
    OrganizationLogoSchema,
    UploadTemporaryLogoRequest,
)
from identity_srv.application.services.service_support import (
    optional_id,
    require_id,
    require_text,
    translate_errors,
)
from identity_srv.domain.entities import LogoStatus, OrganizationLogo, now_millis
from identity_srv.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    InvalidArgumentError,
)

logger = logging.getLogger(__name__)

_MILLIS_PER_DAY = 24 * 60 * 60 * 1000


class LogoService:

    def __init__(
        self,
        repository: OrganizationLogoRepository,
        organization_repository: OrganizationRepository,
        storage: LogoStorage,
        converter: LogoConverter,
        *,
        temporary_ttl_days: int = 7,
        max_size_bytes: int = 5 * 1024 * 1024,
        allowed_mime_types: list[str] | None = None,
    ):
        self._repository = repository
        self._organizations = organization_repository
        self._storage = storage
        self._converter = converter
        self._ttl_millis = temporary_ttl_days * _MILLIS_PER_DAY
        self._max_size_bytes = max_size_bytes
        self._allowed_mime_types = set(allowed_mime_types or [])

    async def upload_temporary_logo(
        self, request: UploadTemporaryLogoRequest
    ) -> OrganizationLogoSchema:
        file_name = require_text(request.file_name, "file_name")
        content = request.file_content or b""
        if not content:
            raise InvalidArgumentError("file_content is required", ErrorCode.LOGO_INVALID_FILE)
        if len(content) > self._max_size_bytes:
            raise InvalidArgumentError(
                f"Logo exceeds {self._max_size_bytes} bytes", ErrorCode.LOGO_INVALID_FILE
            )
        mime_type = (request.mime_type or "").strip()
        if self._allowed_mime_types and mime_type not in self._allowed_mime_types:
            raise InvalidArgumentError(
                f"Unsupported logo type '{mime_type}'", ErrorCode.LOGO_INVALID_FILE
            )
        optional_id(request.uploaded_by, "uploaded_by")

        file_id = f"{uuid4().hex}{Path(file_name).suffix.lower()}"
        expires_at = now_millis() + self._ttl_millis

        with translate_errors("upload logo"):
            await self._storage.upload(file_id, content, mime_type)
            logo = self._converter.upload_request_to_model(request, file_id, expires_at)
            created = await self._repository.create(logo)

        logger.info("Uploaded temporary logo %s (%d bytes)", created.id, len(content))
        return self._to_wire(created)

    async def get_organization_logo(self, logo_id: str | None) -> OrganizationLogoSchema:
        parsed_id = require_id(logo_id, "logo_id")
        with translate_errors("get logo"):
            logo = await self._repository.get_by_id(parsed_id)
        if logo is None or logo.status == LogoStatus.DELETED:
            raise EntityNotFoundError("OrganizationLogo", parsed_id, ErrorCode.LOGO_NOT_FOUND)
        return self._to_wire(logo)

    async def delete_organization_logo(self, logo_id: str | None) -> None:
        parsed_id = require_id(logo_id, "logo_id")
        with translate_errors("delete logo"):
            logo = await self._repository.get_by_id(parsed_id)
            if logo is None or logo.status == LogoStatus.DELETED:
                raise EntityNotFoundError(
                    "OrganizationLogo", parsed_id, ErrorCode.LOGO_NOT_FOUND
                )
            await self._retire(logo)

    async def bind_logo_to_organization(
        self, request: BindLogoToOrganizationRequest
    ) -> OrganizationLogoSchema:
        logo_id = require_id(request.logo_id, "logo_id")
        organization_id = require_id(request.organization_id, "organization_id")

        with translate_errors("bind logo"):
            if await self._organizations.get_by_id(organization_id) is None:
                raise EntityNotFoundError(
                    "Organization", organization_id, ErrorCode.ORGANIZATION_NOT_FOUND
                )
            bound = await self.bind(logo_id, organization_id)
        return self._to_wire(bound)

    # ── Used by the organization facade ──────────────────────────────

    async def bind(self, logo_id: UUID, organization_id: UUID) -> OrganizationLogo:
        """Bind a temporary logo, retiring whatever the organization had before."""
        logo = await self._repository.get_by_id(logo_id)
        if logo is None or logo.status == LogoStatus.DELETED:
            raise EntityNotFoundError("OrganizationLogo", logo_id, ErrorCode.LOGO_NOT_FOUND)
        if logo.status == LogoStatus.BOUND:
            if logo.bound_organization_id == organization_id:
                return logo
            raise ConflictError(
                f"Logo '{logo_id}' is already bound to another organization",
                ErrorCode.LOGO_ALREADY_BOUND,
            )
        if not logo.can_bind():
            raise InvalidArgumentError(f"Logo '{logo_id}' has expired", ErrorCode.LOGO_EXPIRED)

        previous = await self._repository.get_bound_to_organization(organization_id)
        if previous is not None and previous.id != logo.id:
            await self._retire(previous)

        self._converter.bind(logo, organization_id)
        saved = await self._repository.update(logo)
        logger.info("Bound logo %s to organization %s", logo_id, organization_id)
        return saved

    async def release_organization_logo(self, organization_id: UUID) -> None:
        logo = await self._repository.get_bound_to_organization(organization_id)
        if logo is not None:
            await self._retire(logo)

    async def logo_reference(self, organization_id: UUID) -> tuple[str | None, str | None]:
        """Return ``(download_url, logo_id)`` of the organization's bound logo."""
        logo = await self._repository.get_bound_to_organization(organization_id)
        if logo is None:
            return None, None
        return self._storage.download_url(logo.file_id), str(logo.id)

    async def _retire(self, logo: OrganizationLogo) -> None:
        logo.mark_as_deleted()
        await self._repository.update(logo)
        if not await self._storage.delete(logo.file_id):
            logger.warning("Logo file %s was already gone from storage", logo.file_id)
        logger.info("Deleted logo %s", logo.id)

    def _to_wire(self, logo: OrganizationLogo) -> OrganizationLogoSchema:
        return self._converter.model_to_wire(logo, self._storage.download_url(logo.file_id))
