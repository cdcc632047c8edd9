"""SQLAlchemy ORM model for the UserProfile entity."""

import uuid

from sqlalchemy import BigInteger, Boolean, Integer, SmallInteger, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from identity_srv.infrastructure.database.base import Base


class UserProfileModel(Base):
    """ORM model — maps to the 'users' table."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    username: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    is_system_user: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    real_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    gender: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    professional_title: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    license_number: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    # JSON array of strings; the empty list is stored as ''
    specialties: Mapped[str] = mapped_column(Text, nullable=False, default="")
    employee_id: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    status: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=2, index=True)
    login_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    must_change_password: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    account_expiry: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    updated_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    last_login_time: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    def __repr__(self) -> str:
        return f"<UserProfileModel(id={self.id}, username='{self.username}')>"
