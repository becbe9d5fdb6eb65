"""Financial record models."""

import enum
import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import StringEnum
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class FinanceType(str, enum.Enum):
    INCOME = "income"
    EXPENSE = "expense"


INCOME_CATEGORIES = {"rent", "utility", "other"}
EXPENSE_CATEGORIES = {"repair", "tax", "service", "maintenance", "other"}


class FinancialRecord(UUIDPrimaryKey, TimestampMixin, Base):
    """A single income or expense entry, optionally tied to an asset or contract."""

    __tablename__ = "financial_records"

    asset_id: Mapped[str | None] = mapped_column(
        UUID_DB(), ForeignKey("assets.id", ondelete="SET NULL"), nullable=True
    )
    contract_id: Mapped[str | None] = mapped_column(
        UUID_DB(), ForeignKey("contracts.id", ondelete="SET NULL"), nullable=True
    )
    created_by: Mapped[str | None] = mapped_column(
        UUID_DB(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    type: Mapped[FinanceType] = mapped_column(StringEnum(FinanceType), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("ix_financial_records_asset", "asset_id"),
        Index("ix_financial_records_type_date", "type", "date"),
    )

    def __repr__(self) -> str:
        return f"<FinancialRecord(id={self.id}, type={self.type}, amount={self.amount})>"
