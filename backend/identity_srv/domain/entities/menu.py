"""Domain entity — a node of the navigation menu tree."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from .common import now_millis


@dataclass
class Menu:
    """A navigation entry.

    ``semantic_id`` is the stable outward identity (e.g. ``dashboard.reports``);
    ``id`` is a storage surrogate regenerated on every upload.
    """

    semantic_id: str
    name: str
    path: str = ""
    icon: str = ""
    component: str = ""
    id: UUID = field(default_factory=uuid4)
    version: str = ""
    parent_id: UUID | None = None
    sort: int = 0
    children: list["Menu"] = field(default_factory=list)
    created_at: int = field(default_factory=now_millis)
    updated_at: int = field(default_factory=now_millis)
