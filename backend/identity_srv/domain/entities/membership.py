"""Domain entity — a user's membership in an organization (and department)."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from .common import now_millis
from .enums import MembershipStatus


@dataclass
class UserMembership:
    """Links a user to an organization, optionally scoped to a department.

    A user may hold several memberships; at most one of them is primary.
    """

    user_id: UUID
    organization_id: UUID
    id: UUID = field(default_factory=uuid4)
    department_id: UUID | None = None
    status: MembershipStatus = MembershipStatus.ACTIVE
    is_primary: bool = False
    valid_from: int | None = None
    valid_to: int | None = None
    created_by: UUID | None = None
    updated_by: UUID | None = None
    created_at: int = field(default_factory=now_millis)
    updated_at: int = field(default_factory=now_millis)

    def is_active(self, at: int | None = None) -> bool:
        if self.status != MembershipStatus.ACTIVE:
            return False
        moment = at if at is not None else now_millis()
        if self.valid_from is not None and moment < self.valid_from:
            return False
        if self.valid_to is not None and moment >= self.valid_to:
            return False
        return True
