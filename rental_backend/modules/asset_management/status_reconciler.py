"""Asset occupancy reconciliation.

An asset is ``rented`` exactly when at least one of its contracts is
``active`` and today lies within the contract's start and end dates
(both inclusive). Assets under maintenance are left alone.
"""

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.logging import get_logger
from ...core.utils import utc_today
from ..contract_management.models import Contract, ContractStatus
from .models import Asset, AssetStatus

logger = get_logger("assets.status")


def derive_asset_status(
    current_status: AssetStatus, has_covering_contract: bool
) -> AssetStatus:
    """Return the status an asset should have.

    >>> derive_asset_status(AssetStatus.AVAILABLE, True)
    <AssetStatus.RENTED: 'rented'>
    >>> derive_asset_status(AssetStatus.RENTED, False)
    <AssetStatus.AVAILABLE: 'available'>
    """
    if current_status == AssetStatus.MAINTENANCE:
        return AssetStatus.MAINTENANCE
    if has_covering_contract:
        return AssetStatus.RENTED
    if current_status == AssetStatus.RENTED:
        return AssetStatus.AVAILABLE
    return current_status


def covering_contracts_query(today: date):
    """Select asset ids that have an active contract covering ``today``."""
    return (
        select(Contract.asset_id)
        .where(
            Contract.status == ContractStatus.ACTIVE,
            Contract.start_date <= today,
            Contract.end_date >= today,
        )
        .distinct()
    )


async def reconcile_asset_statuses(
    db: AsyncSession, today: date | None = None
) -> int:
    """Recompute every asset's status from its contracts.

    Runs in the caller's transaction and commits once at the end. Safe to
    run repeatedly: a second run without data changes updates nothing.

    Returns:
        Number of assets whose status changed
    """
    today = today or utc_today()

    result = await db.execute(covering_contracts_query(today))
    covered_asset_ids = set(result.scalars().all())

    result = await db.execute(select(Asset).order_by(Asset.created_at))
    changed = 0
    for asset in result.scalars().all():
        new_status = derive_asset_status(asset.status, asset.id in covered_asset_ids)
        if new_status != asset.status:
            logger.info(
                "Asset status changed",
                extra={
                    "asset_id": asset.id,
                    "from_status": asset.status.value,
                    "to_status": new_status.value,
                },
            )
            asset.status = new_status
            changed += 1

    await db.commit()
    logger.info(
        "Asset status reconciliation finished",
        extra={"date": today.isoformat(), "changed": changed},
    )
    return changed


async def sync_asset_status(
    db: AsyncSession,
    asset_id: str,
    today: date | None = None,
) -> AssetStatus | None:
    """Reconcile a single asset after one of its contracts changed.

    Flushes but does not commit; the caller owns the transaction.
    """
    today = today or utc_today()
    asset = await db.get(Asset, asset_id)
    if asset is None:
        return None

    query = covering_contracts_query(today).where(Contract.asset_id == asset_id)
    result = await db.execute(query)
    has_covering = result.scalar_one_or_none() is not None

    new_status = derive_asset_status(asset.status, has_covering)
    if new_status != asset.status:
        logger.info(
            "Asset status changed",
            extra={
                "asset_id": asset.id,
                "from_status": asset.status.value,
                "to_status": new_status.value,
            },
        )
        asset.status = new_status
        await db.flush()
    return asset.status
