"""Abstract repository interface (port) for Department persistence."""

from abc import ABC, abstractmethod
from uuid import UUID

from identity_srv.domain.entities import Department, PageResult, QueryOptions


class DepartmentRepository(ABC):
    """Port for department persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, department_id: UUID) -> Department | None:
        ...

    @abstractmethod
    async def create(self, department: Department) -> Department:
        ...

    @abstractmethod
    async def update(self, department: Department) -> Department:
        ...

    @abstractmethod
    async def delete(self, department_id: UUID) -> bool:
        ...

    @abstractmethod
    async def find(
        self, options: QueryOptions, *, organization_id: UUID | None = None
    ) -> tuple[list[Department], PageResult]:
        ...

    @abstractmethod
    async def name_exists(
        self, organization_id: UUID, name: str, exclude_id: UUID | None = None
    ) -> bool:
        """Whether another department of the organization already uses ``name``."""
        ...

    @abstractmethod
    async def count_by_organization(self, organization_id: UUID) -> int:
        ...
