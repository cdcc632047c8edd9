"""Domain entity — a department inside an organization."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from .common import now_millis


@dataclass
class Department:
    name: str
    organization_id: UUID
    id: UUID = field(default_factory=uuid4)
    department_type: str = ""
    available_equipment: list[str] = field(default_factory=list)
    created_at: int = field(default_factory=now_millis)
    updated_at: int = field(default_factory=now_millis)
