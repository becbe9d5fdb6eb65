"""Authentication models.

Users log in with their phone number. The role decides what a user can
see: admins see everything, owners see their own assets and everything
attached to them, tenants see their own contracts.
"""

import enum

from sqlalchemy import JSON, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import StringEnum
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class UserRole(str, enum.Enum):
    """Available user roles."""

    ADMIN = "admin"
    OWNER = "owner"
    TENANT = "tenant"


class User(UUIDPrimaryKey, TimestampMixin, Base):
    """A person who can log in: admin, asset owner or tenant."""

    __tablename__ = "users"

    phone: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        StringEnum(UserRole), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_by: Mapped[str | None] = mapped_column(
        UUID_DB(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, phone={self.phone}, role={self.role})>"
