"""Tests for asset occupancy reconciliation."""

from datetime import date

from rental_backend.modules.asset_management.models import AssetStatus
from rental_backend.modules.asset_management.status_reconciler import (
    derive_asset_status,
    reconcile_asset_statuses,
    sync_asset_status,
)
from rental_backend.modules.contract_management.models import ContractStatus

from conftest import make_asset, make_contract

MID_2024 = date(2024, 6, 15)


def test_derive_asset_status():
    assert derive_asset_status(AssetStatus.AVAILABLE, True) == AssetStatus.RENTED
    assert derive_asset_status(AssetStatus.RENTED, True) == AssetStatus.RENTED
    assert derive_asset_status(AssetStatus.RENTED, False) == AssetStatus.AVAILABLE
    assert derive_asset_status(AssetStatus.AVAILABLE, False) == AssetStatus.AVAILABLE


def test_maintenance_is_never_touched():
    assert derive_asset_status(AssetStatus.MAINTENANCE, True) == AssetStatus.MAINTENANCE
    assert derive_asset_status(AssetStatus.MAINTENANCE, False) == AssetStatus.MAINTENANCE


async def test_covering_active_contract_marks_asset_rented(db, owner, tenant):
    asset = await make_asset(db, owner.id)
    await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))

    changed = await reconcile_asset_statuses(db, MID_2024)

    await db.refresh(asset)
    assert changed == 1
    assert asset.status == AssetStatus.RENTED


async def test_second_run_reports_no_changes(db, owner, tenant):
    asset = await make_asset(db, owner.id)
    await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))

    assert await reconcile_asset_statuses(db, MID_2024) == 1
    assert await reconcile_asset_statuses(db, MID_2024) == 0


async def test_expired_term_returns_asset_to_available(db, owner, tenant):
    asset = await make_asset(db, owner.id, status=AssetStatus.RENTED)
    await make_contract(db, asset.id, tenant.id, date(2023, 1, 1), date(2023, 12, 31))

    changed = await reconcile_asset_statuses(db, MID_2024)

    await db.refresh(asset)
    assert changed == 1
    assert asset.status == AssetStatus.AVAILABLE


async def test_contract_dates_are_inclusive(db, owner, tenant):
    asset = await make_asset(db, owner.id)
    await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), MID_2024)

    await reconcile_asset_statuses(db, MID_2024)

    await db.refresh(asset)
    assert asset.status == AssetStatus.RENTED


async def test_only_active_contracts_count(db, owner, tenant):
    rented = await make_asset(db, owner.id, name="บ้านเดี่ยว", status=AssetStatus.RENTED)
    await make_contract(
        db,
        rented.id,
        tenant.id,
        date(2024, 1, 1),
        date(2024, 12, 31),
        status=ContractStatus.TERMINATED,
    )
    pending = await make_asset(db, owner.id, name="ทาวน์เฮาส์")
    await make_contract(
        db,
        pending.id,
        tenant.id,
        date(2024, 1, 1),
        date(2024, 12, 31),
        status=ContractStatus.PENDING,
    )

    changed = await reconcile_asset_statuses(db, MID_2024)

    await db.refresh(rented)
    await db.refresh(pending)
    assert changed == 1
    assert rented.status == AssetStatus.AVAILABLE
    assert pending.status == AssetStatus.AVAILABLE


async def test_maintenance_asset_is_left_alone(db, owner, tenant):
    asset = await make_asset(db, owner.id, status=AssetStatus.MAINTENANCE)
    await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))

    changed = await reconcile_asset_statuses(db, MID_2024)

    await db.refresh(asset)
    assert changed == 0
    assert asset.status == AssetStatus.MAINTENANCE


async def test_sync_single_asset(db, owner, tenant):
    asset = await make_asset(db, owner.id)
    other = await make_asset(db, owner.id, name="อีกห้อง")
    await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))
    await make_contract(db, other.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))

    status = await sync_asset_status(db, asset.id, MID_2024)
    await db.commit()

    await db.refresh(asset)
    await db.refresh(other)
    assert status == AssetStatus.RENTED
    assert asset.status == AssetStatus.RENTED
    assert other.status == AssetStatus.AVAILABLE


async def test_sync_unknown_asset_returns_none(db):
    assert await sync_asset_status(db, "00000000-0000-0000-0000-000000000000") is None
