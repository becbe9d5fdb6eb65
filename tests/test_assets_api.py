"""Tests for the asset endpoints."""

from datetime import date, timedelta

from rental_backend.core.utils import utc_today
from rental_backend.modules.asset_management.models import AssetType
from rental_backend.modules.asset_management.services import parse_start_number

from conftest import auth_headers, make_asset, make_contract

ASSET_PAYLOAD = {
    "type": "house",
    "name": "บ้านเดี่ยวสุขุมวิท",
    "address": "12 ซอยสุขุมวิท 77",
    "district": "สวนหลวง",
    "amphoe": "สวนหลวง",
    "province": "กรุงเทพมหานคร",
    "postal_code": "10250",
    "size": 120,
    "rooms": 3,
    "purchase_price": 4500000,
    "current_value": 5200000,
}


def test_parse_start_number():
    assert parse_start_number("101") == 101
    assert parse_start_number("A") == 1
    assert parse_start_number("0") == 1
    assert parse_start_number("") == 1


async def test_owner_creates_asset(client, owner):
    response = await client.post(
        "/api/assets", json=ASSET_PAYLOAD, headers=auth_headers(owner)
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["owner_id"] == owner.id
    assert data["status"] == "available"
    assert data["child_assets"] == []


async def test_owner_cannot_create_for_someone_else(client, owner, other_owner):
    response = await client.post(
        "/api/assets",
        json={**ASSET_PAYLOAD, "owner_id": other_owner.id},
        headers=auth_headers(owner),
    )
    assert response.json()["data"]["owner_id"] == owner.id


async def test_admin_creates_on_behalf_of_owner(client, admin, owner):
    response = await client.post(
        "/api/assets",
        json={**ASSET_PAYLOAD, "owner_id": owner.id},
        headers=auth_headers(admin),
    )
    assert response.status_code == 201
    assert response.json()["data"]["owner_id"] == owner.id


async def test_tenant_cannot_create_asset(client, tenant):
    response = await client.post(
        "/api/assets", json=ASSET_PAYLOAD, headers=auth_headers(tenant)
    )
    assert response.status_code == 403


async def test_listing_is_scoped_by_role(client, db, admin, owner, other_owner, tenant):
    mine = await make_asset(db, owner.id)
    await make_asset(db, other_owner.id, name="ของคนอื่น")
    today = utc_today()
    await make_contract(
        db, mine.id, tenant.id, today - timedelta(days=30), today + timedelta(days=300)
    )

    owner_view = await client.get("/api/assets", headers=auth_headers(owner))
    tenant_view = await client.get("/api/assets", headers=auth_headers(tenant))
    admin_view = await client.get("/api/assets", headers=auth_headers(admin))

    assert [a["id"] for a in owner_view.json()["data"]] == [mine.id]
    assert [a["id"] for a in tenant_view.json()["data"]] == [mine.id]
    assert len(admin_view.json()["data"]) == 2


async def test_tenant_without_contract_cannot_view(client, db, owner, tenant, asset):
    response = await client.get(f"/api/assets/{asset.id}", headers=auth_headers(tenant))
    assert response.status_code == 403


async def test_other_owner_cannot_update(client, other_owner, asset):
    response = await client.put(
        f"/api/assets/{asset.id}",
        json={"name": "ยึดแล้ว"},
        headers=auth_headers(other_owner),
    )
    assert response.status_code == 403


async def test_update_requires_fields(client, owner, asset):
    response = await client.put(
        f"/api/assets/{asset.id}", json={}, headers=auth_headers(owner)
    )
    assert response.status_code == 400


async def test_update_and_delete(client, owner, asset):
    updated = await client.put(
        f"/api/assets/{asset.id}",
        json={"current_value": 3000000, "status": "maintenance"},
        headers=auth_headers(owner),
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["current_value"] == 3000000
    assert updated.json()["data"]["status"] == "maintenance"

    deleted = await client.delete(f"/api/assets/{asset.id}", headers=auth_headers(owner))
    assert deleted.status_code == 200

    missing = await client.get(f"/api/assets/{asset.id}", headers=auth_headers(owner))
    assert missing.status_code == 404


async def test_create_units_in_parent_asset(client, db, owner):
    land = await make_asset(db, owner.id, type=AssetType.LAND, name="อาคารสุขใจ", is_parent=True)

    response = await client.post(
        f"/api/assets/{land.id}/units",
        json={"number_of_units": 3, "unit_size": 28, "rooms": 1, "unit_prefix": "201"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 201
    units = response.json()["data"]
    assert [u["name"] for u in units] == [
        "อาคารสุขใจ - ห้อง 201",
        "อาคารสุขใจ - ห้อง 202",
        "อาคารสุขใจ - ห้อง 203",
    ]
    assert all(u["parent_asset_id"] == land.id for u in units)
    assert all(u["status"] == "available" for u in units)
    assert units[0]["current_value"] == 28 * 50000

    await db.refresh(land)
    assert land.total_units == 3
    assert land.child_assets == [u["id"] for u in units]
    assert land.development_history[-1]["action"] == "units_created"


async def test_units_require_parent_asset(client, owner, asset):
    response = await client.post(
        f"/api/assets/{asset.id}/units",
        json={"number_of_units": 2, "unit_size": 30},
        headers=auth_headers(owner),
    )
    assert response.status_code == 400


async def test_admin_reconciles_statuses(client, db, admin, owner, tenant, asset):
    await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))

    forbidden = await client.post(
        "/api/assets/reconcile-status", headers=auth_headers(owner)
    )
    assert forbidden.status_code == 403

    response = await client.post(
        "/api/assets/reconcile-status",
        params={"date": "2024-06-15"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    assert response.json()["data"] == {"changed": 1, "date": "2024-06-15"}
