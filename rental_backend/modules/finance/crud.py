"""CRUD operations for financial records."""

from datetime import date

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..asset_management.models import Asset
from .models import FinanceType, FinancialRecord


def _filtered(
    query,
    owner_id: str | None = None,
    finance_type: FinanceType | None = None,
    asset_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
):
    if owner_id:
        owned_assets = select(Asset.id).where(Asset.owner_id == owner_id)
        query = query.where(
            or_(
                FinancialRecord.asset_id.in_(owned_assets),
                FinancialRecord.created_by == owner_id,
            )
        )
    if finance_type:
        query = query.where(FinancialRecord.type == finance_type)
    if asset_id:
        query = query.where(FinancialRecord.asset_id == asset_id)
    if date_from:
        query = query.where(FinancialRecord.date >= date_from)
    if date_to:
        query = query.where(FinancialRecord.date <= date_to)
    return query


async def get_record(db: AsyncSession, record_id: str) -> FinancialRecord | None:
    result = await db.execute(
        select(FinancialRecord).where(FinancialRecord.id == record_id)
    )
    return result.scalar_one_or_none()


async def list_records(db: AsyncSession, **filters) -> list[FinancialRecord]:
    """List records newest first. See :func:`_filtered` for the filters."""
    query = _filtered(select(FinancialRecord), **filters)
    result = await db.execute(
        query.order_by(FinancialRecord.date.desc(), FinancialRecord.created_at.desc())
    )
    return list(result.scalars().all())


async def sum_by_type(db: AsyncSession, **filters) -> dict[FinanceType, float]:
    query = _filtered(
        select(FinancialRecord.type, func.coalesce(func.sum(FinancialRecord.amount), 0)),
        **filters,
    ).group_by(FinancialRecord.type)
    result = await db.execute(query)
    return {finance_type: float(total) for finance_type, total in result.all()}


async def create_record(db: AsyncSession, **fields) -> FinancialRecord:
    record = FinancialRecord(**fields)
    db.add(record)
    await db.flush()
    await db.refresh(record)
    return record


async def update_record(
    db: AsyncSession, record: FinancialRecord, **fields
) -> FinancialRecord:
    for key, value in fields.items():
        setattr(record, key, value)
    await db.flush()
    await db.refresh(record)
    return record


async def delete_record(db: AsyncSession, record: FinancialRecord) -> None:
    await db.delete(record)
    await db.flush()
