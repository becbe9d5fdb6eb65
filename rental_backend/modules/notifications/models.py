"""Notification models."""

import enum
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import StringEnum
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class NotificationType(str, enum.Enum):
    PAYMENT_PROOF = "payment_proof"
    PAYMENT_DUE = "payment_due"
    PAYMENT_DUE_SOON = "payment_due_soon"
    PAYMENT_OVERDUE = "payment_overdue"
    PAYMENT_APPROVED = "payment_approved"
    PAYMENT_REJECTED = "payment_rejected"
    CONTRACT_EXPIRING = "contract_expiring"
    MAINTENANCE_REQUEST = "maintenance_request"
    SYSTEM = "system"


class NotificationStatus(str, enum.Enum):
    UNREAD = "unread"
    READ = "read"


class Notification(UUIDPrimaryKey, TimestampMixin, Base):
    """In-app message for a single user."""

    __tablename__ = "notifications"

    user_id: Mapped[str] = mapped_column(
        UUID_DB(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[NotificationType] = mapped_column(
        StringEnum(NotificationType), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    # Payment, maintenance request or contract the message is about
    related_id: Mapped[str | None] = mapped_column(UUID_DB(), nullable=True)
    status: Mapped[NotificationStatus] = mapped_column(
        StringEnum(NotificationStatus),
        nullable=False,
        default=NotificationStatus.UNREAD,
    )
    read_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_notifications_user_status", "user_id", "status"),
        Index("ix_notifications_related", "related_id", "type"),
    )

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user_id={self.user_id}, type={self.type})>"
