"""Domain entity — a user account with personal and professional attributes."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from .common import now_millis
from .enums import Gender, UserStatus


@dataclass
class UserProfile:
    """Core domain entity for a user of the identity service."""

    username: str
    password_hash: str = ""
    id: UUID = field(default_factory=uuid4)
    email: str = ""
    phone: str = ""
    is_system_user: bool = False
    first_name: str = ""
    last_name: str = ""
    real_name: str = ""
    gender: Gender = Gender.UNKNOWN
    professional_title: str = ""
    license_number: str = ""
    specialties: list[str] = field(default_factory=list)
    employee_id: str = ""
    status: UserStatus = UserStatus.INACTIVE
    login_attempts: int = 0
    must_change_password: bool = False
    account_expiry: int | None = None
    created_by: UUID | None = None
    updated_by: UUID | None = None
    last_login_time: int | None = None
    version: int = 1
    created_at: int = field(default_factory=now_millis)
    updated_at: int = field(default_factory=now_millis)

    def is_expired(self, at: int | None = None) -> bool:
        if self.account_expiry is None:
            return False
        return self.account_expiry <= (at if at is not None else now_millis())

    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE and not self.is_expired()

    def is_locked(self) -> bool:
        return self.status == UserStatus.LOCKED

    def can_delete(self) -> bool:
        return not self.is_system_user
