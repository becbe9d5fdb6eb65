"""CRUD operations for assets."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..contract_management.models import Contract, ContractStatus
from .models import Asset, AssetStatus


def _tenant_asset_ids(tenant_id: str):
    return select(Contract.asset_id).where(
        Contract.tenant_id == tenant_id,
        Contract.status == ContractStatus.ACTIVE,
    )


async def get_asset(db: AsyncSession, asset_id: str) -> Asset | None:
    result = await db.execute(select(Asset).where(Asset.id == asset_id))
    return result.scalar_one_or_none()


async def list_assets(
    db: AsyncSession,
    owner_id: str | None = None,
    tenant_id: str | None = None,
) -> list[Asset]:
    """List assets newest first.

    Args:
        owner_id: Only assets owned by this user
        tenant_id: Only assets this tenant rents under an active contract
    """
    query = select(Asset)
    if owner_id:
        query = query.where(Asset.owner_id == owner_id)
    if tenant_id:
        query = query.where(Asset.id.in_(_tenant_asset_ids(tenant_id)))
    result = await db.execute(query.order_by(Asset.created_at.desc()))
    return list(result.scalars().all())


async def tenant_has_active_contract(
    db: AsyncSession, asset_id: str, tenant_id: str
) -> bool:
    result = await db.execute(
        _tenant_asset_ids(tenant_id).where(Contract.asset_id == asset_id).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def create_asset(db: AsyncSession, **fields) -> Asset:
    asset = Asset(**fields)
    db.add(asset)
    await db.flush()
    await db.refresh(asset)
    return asset


async def update_asset(db: AsyncSession, asset: Asset, **fields) -> Asset:
    for key, value in fields.items():
        setattr(asset, key, value)
    await db.flush()
    await db.refresh(asset)
    return asset


async def delete_asset(db: AsyncSession, asset: Asset) -> None:
    await db.delete(asset)
    await db.flush()


async def count_assets_by_status(
    db: AsyncSession, owner_id: str | None = None
) -> dict[AssetStatus, int]:
    query = select(Asset.status, func.count()).group_by(Asset.status)
    if owner_id:
        query = query.where(Asset.owner_id == owner_id)
    result = await db.execute(query)
    return {status: count for status, count in result.all()}


async def count_assets(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Asset))
    return result.scalar_one()
