"""Payment models."""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import StringEnum
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class PaymentType(str, enum.Enum):
    RENT = "rent"
    DEPOSIT = "deposit"
    UTILITY = "utility"
    OTHER = "other"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    WAITING_APPROVAL = "waiting_approval"
    PAID = "paid"
    OVERDUE = "overdue"


# Statuses that still expect money from the tenant
OPEN_STATUSES = (
    PaymentStatus.PENDING,
    PaymentStatus.WAITING_APPROVAL,
    PaymentStatus.OVERDUE,
)


class Payment(UUIDPrimaryKey, TimestampMixin, Base):
    """A single amount owed under a contract."""

    __tablename__ = "payments"

    contract_id: Mapped[str] = mapped_column(
        UUID_DB(), ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    type: Mapped[PaymentType] = mapped_column(StringEnum(PaymentType), nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    paid_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[PaymentStatus] = mapped_column(
        StringEnum(PaymentStatus), nullable=False, default=PaymentStatus.PENDING
    )
    proof_images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    receipt_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    receipt_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_payments_contract_due", "contract_id", "due_date"),
        Index("ix_payments_status_due", "status", "due_date"),
    )

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, amount={self.amount}, status={self.status})>"
