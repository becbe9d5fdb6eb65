"""Maintenance request models."""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import StringEnum
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class MaintenanceType(str, enum.Enum):
    REPAIR = "repair"
    ROUTINE = "routine"
    EMERGENCY = "emergency"


class MaintenanceStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Maintenance(UUIDPrimaryKey, TimestampMixin, Base):
    """A repair or upkeep request against an asset."""

    __tablename__ = "maintenance"

    asset_id: Mapped[str] = mapped_column(
        UUID_DB(), ForeignKey("assets.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[MaintenanceType] = mapped_column(
        StringEnum(MaintenanceType), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    status: Mapped[MaintenanceStatus] = mapped_column(
        StringEnum(MaintenanceStatus), nullable=False, default=MaintenanceStatus.PENDING
    )
    reported_by: Mapped[str | None] = mapped_column(
        UUID_DB(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    scheduled_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    completed_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("ix_maintenance_asset", "asset_id"),
        Index("ix_maintenance_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<Maintenance(id={self.id}, title={self.title}, status={self.status})>"
