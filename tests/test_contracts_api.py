"""Tests for the contract endpoints."""

from datetime import date, timedelta

from sqlalchemy import select

from rental_backend.core.utils import utc_today
from rental_backend.modules.asset_management.models import AssetStatus
from rental_backend.modules.contract_management.models import ContractStatus
from rental_backend.modules.payment_management.models import Payment, PaymentStatus

from conftest import auth_headers, make_asset, make_contract


def contract_payload(asset, tenant, **overrides):
    today = utc_today()
    payload = {
        "asset_id": asset.id,
        "tenant_id": tenant.id,
        "start_date": (today - timedelta(days=10)).isoformat(),
        "end_date": (today + timedelta(days=365)).isoformat(),
        "rent_amount": 8000,
        "deposit": 8000,
        "insurance": 16000,
        "status": "active",
    }
    payload.update(overrides)
    return payload


async def test_create_active_contract(client, db, owner, tenant, asset):
    response = await client.post(
        "/api/contracts",
        json=contract_payload(asset, tenant),
        headers=auth_headers(owner),
    )

    assert response.status_code == 201
    data = response.json()["data"]
    today = utc_today()
    assert data["contract_number"] == f"CT-{today.strftime('%Y%m%d')}-0001"
    assert data["asset_name"] == "คอนโดริมน้ำ"
    assert data["tenant_name"] == "วิชัย เช่าบ้าน"

    await db.refresh(asset)
    assert asset.status == AssetStatus.RENTED

    result = await db.execute(
        select(Payment)
        .where(Payment.contract_id == data["id"])
        .order_by(Payment.due_date)
    )
    payments = result.scalars().all()
    first = next(p for p in payments if p.due_date == today)
    assert float(first.amount) == 24000
    assert len(payments) > 1
    assert all(p.status == PaymentStatus.PENDING for p in payments)
    assert all(p.due_date.day == 1 for p in payments if p is not first)


async def test_contract_numbers_count_up_within_a_day(client, db, owner, tenant, asset):
    first = await client.post(
        "/api/contracts", json=contract_payload(asset, tenant), headers=auth_headers(owner)
    )
    second = await client.post(
        "/api/contracts",
        json=contract_payload(asset, tenant, status="pending"),
        headers=auth_headers(owner),
    )

    assert first.json()["data"]["contract_number"].endswith("-0001")
    assert second.json()["data"]["contract_number"].endswith("-0002")


async def test_contract_number_is_not_reused_after_delete(client, db, owner, tenant, asset):
    first = await client.post(
        "/api/contracts", json=contract_payload(asset, tenant), headers=auth_headers(owner)
    )
    await client.post(
        "/api/contracts",
        json=contract_payload(asset, tenant, status="pending"),
        headers=auth_headers(owner),
    )
    deleted = await client.delete(
        f"/api/contracts/{first.json()['data']['id']}", headers=auth_headers(owner)
    )
    assert deleted.status_code == 200

    third = await client.post(
        "/api/contracts",
        json=contract_payload(asset, tenant, status="pending"),
        headers=auth_headers(owner),
    )

    assert third.status_code == 201
    assert third.json()["data"]["contract_number"].endswith("-0003")


async def test_pending_contract_leaves_asset_available(client, db, owner, tenant, asset):
    response = await client.post(
        "/api/contracts",
        json=contract_payload(asset, tenant, status="pending"),
        headers=auth_headers(owner),
    )

    assert response.status_code == 201
    await db.refresh(asset)
    assert asset.status == AssetStatus.AVAILABLE


async def test_lease_to_non_tenant_is_rejected(client, owner, other_owner, asset):
    response = await client.post(
        "/api/contracts",
        json=contract_payload(asset, other_owner),
        headers=auth_headers(owner),
    )
    assert response.status_code == 400


async def test_end_before_start_is_rejected(client, owner, tenant, asset):
    response = await client.post(
        "/api/contracts",
        json=contract_payload(asset, tenant, start_date="2024-05-01", end_date="2024-04-01"),
        headers=auth_headers(owner),
    )
    assert response.status_code == 422


async def test_cannot_lease_someone_elses_asset(client, other_owner, tenant, asset):
    response = await client.post(
        "/api/contracts",
        json=contract_payload(asset, tenant),
        headers=auth_headers(other_owner),
    )
    assert response.status_code == 403


async def test_tenant_sees_only_own_contracts(client, db, owner, tenant, asset):
    contract = await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))

    tenant_view = await client.get("/api/contracts", headers=auth_headers(tenant))
    assert [c["id"] for c in tenant_view.json()["data"]] == [contract.id]

    detail = await client.get(f"/api/contracts/{contract.id}", headers=auth_headers(tenant))
    assert detail.status_code == 200


async def test_other_owner_cannot_view_contract(client, db, other_owner, tenant, asset):
    contract = await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))

    response = await client.get(
        f"/api/contracts/{contract.id}", headers=auth_headers(other_owner)
    )
    assert response.status_code == 403


async def test_filter_by_status(client, db, owner, tenant, asset):
    await make_contract(db, asset.id, tenant.id, date(2023, 1, 1), date(2023, 12, 31), status=ContractStatus.EXPIRED)
    active = await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))

    response = await client.get(
        "/api/contracts", params={"status": "active"}, headers=auth_headers(owner)
    )
    assert [c["id"] for c in response.json()["data"]] == [active.id]


async def test_terminating_contract_frees_asset(client, db, owner, tenant):
    today = utc_today()
    asset = await make_asset(db, owner.id, status=AssetStatus.RENTED)
    contract = await make_contract(
        db, asset.id, tenant.id, today - timedelta(days=30), today + timedelta(days=30)
    )

    response = await client.put(
        f"/api/contracts/{contract.id}",
        json={"status": "terminated"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "terminated"
    await db.refresh(asset)
    assert asset.status == AssetStatus.AVAILABLE


async def test_terminating_one_of_two_active_contracts_keeps_asset_rented(
    client, db, owner, tenant
):
    today = utc_today()
    asset = await make_asset(db, owner.id, status=AssetStatus.RENTED)
    first = await make_contract(
        db, asset.id, tenant.id, today - timedelta(days=30), today + timedelta(days=30)
    )
    await make_contract(
        db, asset.id, tenant.id, today - timedelta(days=10), today + timedelta(days=90)
    )

    response = await client.put(
        f"/api/contracts/{first.id}",
        json={"status": "terminated"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    await db.refresh(asset)
    assert asset.status == AssetStatus.RENTED


async def test_contract_changes_leave_maintenance_asset_alone(client, db, owner, tenant):
    asset = await make_asset(db, owner.id, status=AssetStatus.MAINTENANCE)

    created = await client.post(
        "/api/contracts", json=contract_payload(asset, tenant), headers=auth_headers(owner)
    )
    assert created.status_code == 201
    await db.refresh(asset)
    assert asset.status == AssetStatus.MAINTENANCE

    updated = await client.put(
        f"/api/contracts/{created.json()['data']['id']}",
        json={"status": "terminated"},
        headers=auth_headers(owner),
    )
    assert updated.status_code == 200
    await db.refresh(asset)
    assert asset.status == AssetStatus.MAINTENANCE


async def test_update_rechecks_dates(client, db, owner, tenant, asset):
    contract = await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))

    response = await client.put(
        f"/api/contracts/{contract.id}",
        json={"end_date": "2023-06-01"},
        headers=auth_headers(owner),
    )
    assert response.status_code == 400


async def test_delete_contract_removes_payments(client, db, owner, tenant, asset):
    created = await client.post(
        "/api/contracts", json=contract_payload(asset, tenant), headers=auth_headers(owner)
    )
    contract_id = created.json()["data"]["id"]

    response = await client.delete(f"/api/contracts/{contract_id}", headers=auth_headers(owner))

    assert response.status_code == 200
    result = await db.execute(select(Payment).where(Payment.contract_id == contract_id))
    assert result.scalars().all() == []
    await db.refresh(asset)
    assert asset.status == AssetStatus.AVAILABLE
