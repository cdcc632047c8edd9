"""Abstract repository interfaces (ports) for organizations and their logos."""

from abc import ABC, abstractmethod
from uuid import UUID

from identity_srv.domain.entities import Organization, OrganizationLogo, PageResult, QueryOptions


class OrganizationRepository(ABC):
    """Port for organization persistence."""

    @abstractmethod
    async def get_by_id(self, organization_id: UUID) -> Organization | None:
        ...

    @abstractmethod
    async def get_by_code(self, code: str) -> Organization | None:
        ...

    @abstractmethod
    async def create(self, organization: Organization) -> Organization:
        ...

    @abstractmethod
    async def update(self, organization: Organization) -> Organization:
        ...

    @abstractmethod
    async def delete(self, organization_id: UUID) -> bool:
        """Delete an organization. Returns True if deleted."""
        ...

    @abstractmethod
    async def find(
        self, options: QueryOptions, *, parent_id: UUID | None = None
    ) -> tuple[list[Organization], PageResult]:
        ...

    @abstractmethod
    async def count_children(self, organization_id: UUID) -> int:
        """Number of organizations whose parent is the given one."""
        ...


class OrganizationLogoRepository(ABC):
    """Port for logo metadata persistence."""

    @abstractmethod
    async def get_by_id(self, logo_id: UUID) -> OrganizationLogo | None:
        ...

    @abstractmethod
    async def get_bound_to_organization(self, organization_id: UUID) -> OrganizationLogo | None:
        """Return the logo currently bound to an organization, if any."""
        ...

    @abstractmethod
    async def create(self, logo: OrganizationLogo) -> OrganizationLogo:
        ...

    @abstractmethod
    async def update(self, logo: OrganizationLogo) -> OrganizationLogo:
        ...
