"""Abstract repository interfaces (ports) for menus and role → menu grants."""

from abc import ABC, abstractmethod
from uuid import UUID

from identity_srv.domain.entities import Menu


class MenuRepository(ABC):
    """Port for versioned menu storage; every upload creates a new version."""

    @abstractmethod
    async def save_version(self, menus: list[Menu]) -> None:
        """Persist a flattened menu tree (all nodes share one version)."""
        ...

    @abstractmethod
    async def get_latest_version(self) -> str | None:
        ...

    @abstractmethod
    async def list_by_version(self, version: str) -> list[Menu]:
        """Flat list of the version's nodes ordered by ``sort``."""
        ...


class RoleMenuRepository(ABC):
    """Port for the semantic menu ids granted to each role."""

    @abstractmethod
    async def set_role_menus(self, role_id: UUID, semantic_ids: list[str]) -> None:
        """Replace the menus granted to a role."""
        ...

    @abstractmethod
    async def get_role_menus(self, role_id: UUID) -> list[str]:
        ...
