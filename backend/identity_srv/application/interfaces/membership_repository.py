"""Abstract repository interface (port) for UserMembership persistence."""

from abc import ABC, abstractmethod
from uuid import UUID

from identity_srv.domain.entities import PageResult, QueryOptions, UserMembership


class MembershipRepository(ABC):
    """Port for membership persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, membership_id: UUID) -> UserMembership | None:
        ...

    @abstractmethod
    async def create(self, membership: UserMembership) -> UserMembership:
        ...

    @abstractmethod
    async def update(self, membership: UserMembership) -> UserMembership:
        ...

    @abstractmethod
    async def delete(self, membership_id: UUID) -> bool:
        ...

    @abstractmethod
    async def find(
        self,
        options: QueryOptions,
        *,
        user_id: UUID | None = None,
        organization_id: UUID | None = None,
    ) -> tuple[list[UserMembership], PageResult]:
        ...

    @abstractmethod
    async def list_by_user(self, user_id: UUID) -> list[UserMembership]:
        """All memberships of a user, regardless of status."""
        ...

    @abstractmethod
    async def get_primary(self, user_id: UUID) -> UserMembership | None:
        ...

    @abstractmethod
    async def find_existing(
        self, user_id: UUID, organization_id: UUID, department_id: UUID | None
    ) -> UserMembership | None:
        """Membership of a user in exactly this organization / department pair."""
        ...

    @abstractmethod
    async def clear_primary(self, user_id: UUID, exclude_id: UUID | None = None) -> None:
        """Unset the primary flag on the user's memberships except ``exclude_id``."""
        ...

    @abstractmethod
    async def count_by_department(self, department_id: UUID) -> int:
        ...

    @abstractmethod
    async def count_by_organization(self, organization_id: UUID) -> int:
        ...
