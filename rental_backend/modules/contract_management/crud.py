"""CRUD operations for contracts."""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..asset_management.models import Asset
from ..auth.models import User
from .models import Contract, ContractStatus


def _with_names():
    return (
        select(Contract, Asset.name, User.name)
        .join(Asset, Asset.id == Contract.asset_id)
        .join(User, User.id == Contract.tenant_id)
    )


def _attach_names(rows) -> list[Contract]:
    contracts = []
    for contract, asset_name, tenant_name in rows:
        contract.asset_name = asset_name
        contract.tenant_name = tenant_name
        contracts.append(contract)
    return contracts


async def get_contract(db: AsyncSession, contract_id: str) -> Contract | None:
    """Contract with ``asset_name`` and ``tenant_name`` attached."""
    result = await db.execute(_with_names().where(Contract.id == contract_id))
    contracts = _attach_names(result.all())
    return contracts[0] if contracts else None


async def list_contracts(
    db: AsyncSession,
    owner_id: str | None = None,
    tenant_id: str | None = None,
    asset_id: str | None = None,
    status: ContractStatus | None = None,
) -> list[Contract]:
    """List contracts newest first, with asset and tenant names."""
    query = _with_names()
    if owner_id:
        query = query.where(Asset.owner_id == owner_id)
    if tenant_id:
        query = query.where(Contract.tenant_id == tenant_id)
    if asset_id:
        query = query.where(Contract.asset_id == asset_id)
    if status:
        query = query.where(Contract.status == status)
    result = await db.execute(query.order_by(Contract.created_at.desc()))
    return _attach_names(result.all())


async def last_number_with_prefix(db: AsyncSession, prefix: str) -> str | None:
    """Highest contract number starting with ``prefix``, if any."""
    result = await db.execute(
        select(func.max(Contract.contract_number)).where(
            Contract.contract_number.like(f"{prefix}%")
        )
    )
    return result.scalar_one()


async def count_by_status(
    db: AsyncSession, owner_id: str | None = None, tenant_id: str | None = None
) -> dict[ContractStatus, int]:
    query = select(Contract.status, func.count()).select_from(Contract)
    if owner_id:
        query = query.join(Asset, Asset.id == Contract.asset_id).where(
            Asset.owner_id == owner_id
        )
    if tenant_id:
        query = query.where(Contract.tenant_id == tenant_id)
    result = await db.execute(query.group_by(Contract.status))
    return {status: count for status, count in result.all()}


async def active_rent_total(db: AsyncSession, owner_id: str | None = None) -> float:
    """Sum of monthly rent over active contracts."""
    query = select(func.coalesce(func.sum(Contract.rent_amount), 0)).where(
        Contract.status == ContractStatus.ACTIVE
    )
    if owner_id:
        query = query.join(Asset, Asset.id == Contract.asset_id).where(
            Asset.owner_id == owner_id
        )
    result = await db.execute(query)
    return float(result.scalar_one())


async def create_contract(db: AsyncSession, **fields) -> Contract:
    contract = Contract(**fields)
    db.add(contract)
    await db.flush()
    return contract


async def update_contract(db: AsyncSession, contract: Contract, **fields) -> Contract:
    for key, value in fields.items():
        setattr(contract, key, value)
    await db.flush()
    return contract


async def delete_contract(db: AsyncSession, contract: Contract) -> None:
    await db.delete(contract)
    await db.flush()


def contract_number_prefix(day: date) -> str:
    return f"CT-{day.strftime('%Y%m%d')}-"
