"""CRUD operations for payments."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..asset_management.models import Asset
from ..contract_management.models import Contract
from .models import Payment, PaymentStatus


def _scoped(query, owner_id: str | None = None, tenant_id: str | None = None):
    if owner_id or tenant_id:
        query = query.join(Contract, Contract.id == Payment.contract_id)
    if owner_id:
        query = query.join(Asset, Asset.id == Contract.asset_id).where(
            Asset.owner_id == owner_id
        )
    if tenant_id:
        query = query.where(Contract.tenant_id == tenant_id)
    return query


async def get_payment(db: AsyncSession, payment_id: str) -> Payment | None:
    result = await db.execute(select(Payment).where(Payment.id == payment_id))
    return result.scalar_one_or_none()


async def get_payment_context(
    db: AsyncSession, payment_id: str
) -> tuple[Payment, Contract, Asset] | None:
    """Payment together with its contract and asset."""
    result = await db.execute(
        select(Payment, Contract, Asset)
        .join(Contract, Contract.id == Payment.contract_id)
        .join(Asset, Asset.id == Contract.asset_id)
        .where(Payment.id == payment_id)
    )
    row = result.one_or_none()
    return tuple(row) if row else None


async def list_payments(
    db: AsyncSession,
    owner_id: str | None = None,
    tenant_id: str | None = None,
    contract_id: str | None = None,
    status: PaymentStatus | None = None,
) -> list[Payment]:
    """List payments, latest due date first."""
    query = _scoped(select(Payment), owner_id, tenant_id)
    if contract_id:
        query = query.where(Payment.contract_id == contract_id)
    if status:
        query = query.where(Payment.status == status)
    result = await db.execute(
        query.order_by(Payment.due_date.desc(), Payment.created_at.desc())
    )
    return list(result.scalars().all())


async def count_by_status(
    db: AsyncSession, owner_id: str | None = None, tenant_id: str | None = None
) -> dict[PaymentStatus, int]:
    query = _scoped(
        select(Payment.status, func.count()).select_from(Payment), owner_id, tenant_id
    ).group_by(Payment.status)
    result = await db.execute(query)
    return {status: count for status, count in result.all()}


async def create_payment(db: AsyncSession, **fields) -> Payment:
    payment = Payment(**fields)
    db.add(payment)
    await db.flush()
    await db.refresh(payment)
    return payment


async def update_payment(db: AsyncSession, payment: Payment, **fields) -> Payment:
    for key, value in fields.items():
        setattr(payment, key, value)
    await db.flush()
    await db.refresh(payment)
    return payment
