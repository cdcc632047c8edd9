"""Abstract repository interfaces (ports) for roles and role assignments."""

from abc import ABC, abstractmethod
from uuid import UUID

from identity_srv.domain.entities import (
    PageResult,
    QueryOptions,
    RoleDefinition,
    RoleStatus,
    UserRoleAssignment,
)


class RoleDefinitionRepository(ABC):
    """Port for role definition persistence."""

    @abstractmethod
    async def get_by_id(self, role_id: UUID) -> RoleDefinition | None:
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> RoleDefinition | None:
        ...

    @abstractmethod
    async def list_by_ids(self, role_ids: list[UUID]) -> list[RoleDefinition]:
        ...

    @abstractmethod
    async def create(self, role: RoleDefinition) -> RoleDefinition:
        ...

    @abstractmethod
    async def update(self, role: RoleDefinition) -> RoleDefinition:
        ...

    @abstractmethod
    async def delete(self, role_id: UUID) -> bool:
        ...

    @abstractmethod
    async def find(
        self,
        options: QueryOptions,
        *,
        name: str | None = None,
        status: RoleStatus | None = None,
        is_system_role: bool | None = None,
    ) -> tuple[list[RoleDefinition], PageResult]:
        ...


class RoleAssignmentRepository(ABC):
    """Port for user ↔ role assignment persistence."""

    @abstractmethod
    async def get_by_id(self, assignment_id: UUID) -> UserRoleAssignment | None:
        ...

    @abstractmethod
    async def get_by_user_and_role(
        self, user_id: UUID, role_id: UUID
    ) -> UserRoleAssignment | None:
        ...

    @abstractmethod
    async def get_last_for_user(self, user_id: UUID) -> UserRoleAssignment | None:
        """The most recently created assignment of a user."""
        ...

    @abstractmethod
    async def create(self, assignment: UserRoleAssignment) -> UserRoleAssignment:
        ...

    @abstractmethod
    async def update(self, assignment: UserRoleAssignment) -> UserRoleAssignment:
        ...

    @abstractmethod
    async def delete(self, assignment_id: UUID) -> bool:
        ...

    @abstractmethod
    async def find(
        self,
        options: QueryOptions,
        *,
        user_id: UUID | None = None,
        role_id: UUID | None = None,
    ) -> tuple[list[UserRoleAssignment], PageResult]:
        ...

    @abstractmethod
    async def count_by_role(self, role_id: UUID) -> int:
        ...

    @abstractmethod
    async def list_user_ids_by_role(self, role_id: UUID) -> list[UUID]:
        ...

    @abstractmethod
    async def list_role_ids_by_user(self, user_id: UUID) -> list[UUID]:
        ...

    @abstractmethod
    async def replace_role_users(
        self, role_id: UUID, user_ids: list[UUID], actor_id: UUID | None
    ) -> int:
        """Make ``user_ids`` the exact holders of a role. Returns the holder count."""
        ...
