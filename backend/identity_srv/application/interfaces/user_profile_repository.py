"""Abstract repository interface (port) for UserProfile persistence."""

from abc import ABC, abstractmethod
from uuid import UUID

from identity_srv.domain.entities import PageResult, QueryOptions, UserProfile, UserStatus


class UserProfileRepository(ABC):
    """Port for user persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> UserProfile | None:
        """Retrieve a single user by ID."""
        ...

    @abstractmethod
    async def get_by_username(self, username: str) -> UserProfile | None:
        """Retrieve a single user by username."""
        ...

    @abstractmethod
    async def create(self, user: UserProfile) -> UserProfile:
        """Persist a new user and return it."""
        ...

    @abstractmethod
    async def update(self, user: UserProfile) -> UserProfile:
        """Update an existing user."""
        ...

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """Delete a user. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def find(
        self,
        options: QueryOptions,
        *,
        organization_id: UUID | None = None,
        status: UserStatus | None = None,
    ) -> tuple[list[UserProfile], PageResult]:
        """Return one page of users matching the options and filters."""
        ...

    @abstractmethod
    async def record_failed_login(self, user_id: UUID, lock_threshold: int) -> int:
        """Increment the failed-login counter, locking the account at ``lock_threshold``.

        The change is committed immediately so it survives the failing
        request. Returns the new attempt count.
        """
        ...
