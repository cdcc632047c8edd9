"""Domain entities — organizations and their logos."""

import re
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from .common import now_millis
from .enums import LogoStatus

_CODE_MAX_LENGTH = 8
_NON_ALNUM = re.compile(r"[^0-9A-Za-z]")


def generate_organization_code(name: str) -> str:
    """Build an organization code from its name.

    Keeps ASCII letters and digits only, upper-cases them and truncates to
    eight characters; falls back to ``ORG`` when fewer than two remain.
    """
    code = _NON_ALNUM.sub("", name).upper()[:_CODE_MAX_LENGTH]
    if len(code) < 2:
        return "ORG"
    return code


@dataclass
class Organization:
    """A facility or company; organizations nest at most two levels deep."""

    name: str
    code: str = ""
    id: UUID = field(default_factory=uuid4)
    parent_id: UUID | None = None
    facility_type: str = ""
    accreditation_status: str = ""
    province_city: list[str] = field(default_factory=list)
    created_at: int = field(default_factory=now_millis)
    updated_at: int = field(default_factory=now_millis)


@dataclass
class OrganizationLogo:
    """An uploaded logo file, temporary until bound to an organization."""

    file_id: str
    file_name: str = ""
    file_size: int = 0
    mime_type: str = ""
    id: UUID = field(default_factory=uuid4)
    status: LogoStatus = LogoStatus.TEMPORARY
    bound_organization_id: UUID | None = None
    expires_at: int | None = None
    uploaded_by: UUID | None = None
    created_at: int = field(default_factory=now_millis)
    updated_at: int = field(default_factory=now_millis)

    def is_expired(self, at: int | None = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at <= (at if at is not None else now_millis())

    def can_bind(self) -> bool:
        return self.status == LogoStatus.TEMPORARY and not self.is_expired()

    def bind_to_organization(self, organization_id: UUID) -> None:
        self.status = LogoStatus.BOUND
        self.bound_organization_id = organization_id
        self.expires_at = None
        self.updated_at = now_millis()

    def mark_as_deleted(self) -> None:
        self.status = LogoStatus.DELETED
        self.updated_at = now_millis()
