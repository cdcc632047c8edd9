"""Domain entities — permissions, role definitions and role assignments."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from .common import now_millis
from .enums import RoleStatus


@dataclass
class Permission:
    resource: str
    action: str
    description: str = ""


@dataclass
class RoleDefinition:
    """A named bundle of permissions.

    ``is_system_role`` is fixed at creation; ``user_count`` is computed on
    read and never persisted.
    """

    name: str
    id: UUID = field(default_factory=uuid4)
    description: str = ""
    status: RoleStatus = RoleStatus.INACTIVE
    permissions: list[Permission] = field(default_factory=list)
    is_system_role: bool = False
    created_by: UUID | None = None
    updated_by: UUID | None = None
    created_at: int = field(default_factory=now_millis)
    updated_at: int = field(default_factory=now_millis)
    user_count: int = 0


@dataclass
class UserRoleAssignment:
    user_id: UUID
    role_id: UUID
    id: UUID = field(default_factory=uuid4)
    created_by: UUID | None = None
    updated_by: UUID | None = None
    created_at: int = field(default_factory=now_millis)
    updated_at: int = field(default_factory=now_millis)
