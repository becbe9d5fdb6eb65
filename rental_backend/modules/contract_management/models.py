"""Contract models."""

import enum
from datetime import date
from decimal import Decimal

from sqlalchemy import JSON, Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import StringEnum
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class ContractStatus(str, enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    TERMINATED = "terminated"
    PENDING = "pending"


class Contract(UUIDPrimaryKey, TimestampMixin, Base):
    """Lease of one asset to one tenant over an inclusive date range."""

    __tablename__ = "contracts"

    contract_number: Mapped[str | None] = mapped_column(
        String(30), unique=True, nullable=True
    )
    asset_id: Mapped[str] = mapped_column(
        UUID_DB(), ForeignKey("assets.id", ondelete="CASCADE"), nullable=False
    )
    tenant_id: Mapped[str] = mapped_column(
        UUID_DB(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    rent_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    deposit: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)
    insurance: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=0
    )
    status: Mapped[ContractStatus] = mapped_column(
        StringEnum(ContractStatus), nullable=False, default=ContractStatus.PENDING
    )
    documents: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_contracts_asset", "asset_id"),
        Index("ix_contracts_tenant", "tenant_id"),
        Index("ix_contracts_status_dates", "status", "start_date", "end_date"),
    )

    def covers(self, day: date) -> bool:
        """Whether this contract is active and ``day`` falls in its term."""
        return (
            self.status == ContractStatus.ACTIVE
            and self.start_date <= day <= self.end_date
        )

    def __repr__(self) -> str:
        return f"<Contract(id={self.id}, number={self.contract_number}, status={self.status})>"
