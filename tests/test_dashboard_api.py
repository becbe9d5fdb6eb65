"""Tests for dashboard aggregates."""

from datetime import date

from rental_backend.modules.asset_management.models import AssetStatus
from rental_backend.modules.contract_management.models import ContractStatus
from rental_backend.modules.maintenance.models import Maintenance, MaintenanceStatus, MaintenanceType
from rental_backend.modules.payment_management.models import PaymentStatus

from conftest import auth_headers, make_asset, make_contract, make_payment


async def add_request(db, asset_id, reported_by, status=MaintenanceStatus.PENDING):
    request = Maintenance(
        asset_id=asset_id,
        type=MaintenanceType.REPAIR,
        title="ก๊อกน้ำรั่ว",
        description="ก๊อกน้ำในห้องน้ำรั่ว",
        status=status,
        reported_by=reported_by,
        images=[],
    )
    db.add(request)
    await db.commit()
    return request


async def seed_portfolio(db, owner, other_owner, tenant):
    rented = await make_asset(db, owner.id, status=AssetStatus.RENTED)
    await make_asset(db, owner.id, name="ทาวน์เฮาส์")
    await make_asset(db, owner.id, name="ห้องรีโนเวท", status=AssetStatus.MAINTENANCE)
    foreign = await make_asset(db, other_owner.id, name="บ้านคนอื่น")

    active = await make_contract(db, rented.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))
    await make_contract(
        db,
        rented.id,
        tenant.id,
        date(2023, 1, 1),
        date(2023, 12, 31),
        status=ContractStatus.EXPIRED,
        rent_amount=7000,
    )
    await make_contract(db, foreign.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31), rent_amount=12000)

    await make_payment(db, active.id, date(2024, 2, 1), status=PaymentStatus.PAID)
    await make_payment(db, active.id, date(2024, 3, 1), status=PaymentStatus.OVERDUE)
    await make_payment(db, active.id, date(2024, 4, 1))

    await add_request(db, rented.id, tenant.id)
    await add_request(db, rented.id, tenant.id, status=MaintenanceStatus.IN_PROGRESS)
    await add_request(db, rented.id, owner.id, status=MaintenanceStatus.COMPLETED)
    await add_request(db, foreign.id, other_owner.id)


async def test_owner_dashboard(client, db, owner, other_owner, tenant):
    await seed_portfolio(db, owner, other_owner, tenant)

    response = await client.get("/api/dashboard", headers=auth_headers(owner))

    assert response.status_code == 200
    assert response.json()["data"] == {
        "total_assets": 3,
        "assets_by_status": {"available": 1, "rented": 1, "maintenance": 1},
        "total_contracts": 2,
        "monthly_income": 8000,
        "pending_maintenance": 2,
        "paid_count": 1,
        "overdue_count": 1,
    }


async def test_admin_dashboard_covers_everything(client, db, admin, owner, other_owner, tenant):
    await seed_portfolio(db, owner, other_owner, tenant)

    response = await client.get("/api/dashboard", headers=auth_headers(admin))

    data = response.json()["data"]
    assert data["total_assets"] == 4
    assert data["total_contracts"] == 3
    assert data["monthly_income"] == 20000
    assert data["pending_maintenance"] == 3


async def test_tenant_dashboard(client, db, owner, other_owner, tenant):
    await seed_portfolio(db, owner, other_owner, tenant)

    response = await client.get("/api/dashboard", headers=auth_headers(tenant))

    assert response.json()["data"] == {
        "total_contracts": 2,
        "pending_payments": 1,
        "overdue_payments": 1,
        "pending_maintenance": 2,
    }


async def test_admin_summary(client, db, admin, owner, other_owner, tenant):
    await seed_portfolio(db, owner, other_owner, tenant)

    forbidden = await client.get("/api/admin/summary", headers=auth_headers(owner))
    assert forbidden.status_code == 403

    response = await client.get("/api/admin/summary", headers=auth_headers(admin))

    assert response.json()["data"] == {
        "total_owners": 2,
        "total_tenants": 1,
        "total_assets": 4,
        "contracts_by_status": {"active": 2, "expired": 1, "terminated": 0, "pending": 0},
    }
