"""SQLAlchemy ORM models for role definitions, assignments and role menus."""

import uuid

from sqlalchemy import JSON, BigInteger, Boolean, ForeignKey, SmallInteger, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from identity_srv.infrastructure.database.base import Base


class RoleDefinitionModel(Base):
    """ORM model — maps to the 'role_definitions' table."""

    __tablename__ = "role_definitions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=2, index=True)
    # [{"resource": ..., "action": ..., "description": ...}, ...]
    permissions: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_system_role: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    updated_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)


class UserRoleAssignmentModel(Base):
    """ORM model — maps to the 'user_role_assignments' table."""

    __tablename__ = "user_role_assignments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("role_definitions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    updated_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_role_assignments_user_role"),
    )


class RoleMenuModel(Base):
    """ORM model — maps to the 'role_menus' table (semantic menu ids per role)."""

    __tablename__ = "role_menus"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    role_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("role_definitions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    semantic_id: Mapped[str] = mapped_column(String(100), nullable=False)

    __table_args__ = (
        UniqueConstraint("role_id", "semantic_id", name="uq_role_menus_role_menu"),
    )
