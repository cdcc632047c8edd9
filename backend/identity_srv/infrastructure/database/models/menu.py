"""SQLAlchemy ORM model for versioned menu nodes."""

import uuid

from sqlalchemy import BigInteger, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from identity_srv.infrastructure.database.base import Base


class MenuModel(Base):
    """ORM model — maps to the 'menus' table; one row per node per version."""

    __tablename__ = "menus"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    semantic_id: Mapped[str] = mapped_column(String(100), nullable=False)
    version: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    path: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    component: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    icon: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    parent_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    sort: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        UniqueConstraint("semantic_id", "version", name="uq_menus_semantic_version"),
    )
