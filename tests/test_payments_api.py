"""Tests for payment proof, approval, rejection and receipts."""

from datetime import date

from sqlalchemy import select

from rental_backend.modules.auth.models import UserRole
from rental_backend.modules.finance.models import FinanceType, FinancialRecord
from rental_backend.modules.notifications.models import Notification, NotificationType
from rental_backend.modules.payment_management.models import PaymentStatus, PaymentType

from conftest import _create_user, auth_headers, make_payment


async def notifications_for(db, user_id):
    result = await db.execute(select(Notification).where(Notification.user_id == user_id))
    return result.scalars().all()


async def test_tenant_uploads_proof(client, db, owner, tenant, contract):
    payment = await make_payment(db, contract.id, date(2024, 3, 1))

    response = await client.put(
        f"/api/payments/{payment.id}",
        json={"proof_images": ["https://cdn.example.com/slip.jpg"]},
        headers=auth_headers(tenant),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "waiting_approval"
    assert data["proof_images"] == ["https://cdn.example.com/slip.jpg"]

    [notification] = await notifications_for(db, owner.id)
    assert notification.type == NotificationType.PAYMENT_PROOF
    assert notification.related_id == payment.id
    assert "8,000" in notification.message


async def test_tenant_cannot_change_status(client, db, tenant, contract):
    payment = await make_payment(db, contract.id, date(2024, 3, 1))

    response = await client.put(
        f"/api/payments/{payment.id}",
        json={"status": "paid"},
        headers=auth_headers(tenant),
    )

    assert response.status_code == 400
    await db.refresh(payment)
    assert payment.status == PaymentStatus.PENDING


async def test_other_tenant_cannot_see_payment(client, db, contract):
    stranger = await _create_user(db, "0855555555", UserRole.TENANT, "คนแปลกหน้า")
    payment = await make_payment(db, contract.id, date(2024, 3, 1))

    response = await client.get(
        f"/api/payments/{payment.id}", headers=auth_headers(stranger)
    )
    assert response.status_code == 403


async def test_owner_approves_payment(client, db, owner, tenant, asset, contract):
    payment = await make_payment(
        db, contract.id, date(2024, 3, 1), status=PaymentStatus.WAITING_APPROVAL
    )

    response = await client.post(
        f"/api/payments/{payment.id}/approve",
        json={"paid_date": "2024-03-02", "payment_method": "transfer"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "paid"
    assert data["paid_date"] == "2024-03-02"
    assert data["receipt_number"] == f"REC-20240302-{payment.id[-3:].upper()}"
    assert data["receipt_date"] == "2024-03-02"

    result = await db.execute(select(FinancialRecord))
    [record] = result.scalars().all()
    assert record.type == FinanceType.INCOME
    assert record.category == "rent"
    assert float(record.amount) == 8000
    assert record.asset_id == asset.id
    assert record.contract_id == contract.id
    assert record.date == date(2024, 3, 2)

    [notification] = await notifications_for(db, tenant.id)
    assert notification.type == NotificationType.PAYMENT_APPROVED
    assert data["receipt_number"] in notification.message


async def test_approve_without_body_uses_today(client, db, owner, contract):
    payment = await make_payment(db, contract.id, date(2024, 3, 1))

    response = await client.post(
        f"/api/payments/{payment.id}/approve", headers=auth_headers(owner)
    )

    assert response.status_code == 200
    assert response.json()["data"]["paid_date"] is not None


async def test_paid_payment_cannot_be_approved_twice(client, db, owner, contract):
    payment = await make_payment(
        db, contract.id, date(2024, 3, 1), status=PaymentStatus.PAID
    )

    response = await client.post(
        f"/api/payments/{payment.id}/approve", headers=auth_headers(owner)
    )
    assert response.status_code == 422


async def test_utility_payment_books_utility_income(client, db, owner, contract):
    payment = await make_payment(
        db, contract.id, date(2024, 3, 1), amount="1500", payment_type=PaymentType.UTILITY
    )

    await client.post(f"/api/payments/{payment.id}/approve", headers=auth_headers(owner))

    result = await db.execute(select(FinancialRecord))
    assert result.scalar_one().category == "utility"


async def test_owner_rejects_proof(client, db, owner, tenant, contract):
    payment = await make_payment(
        db, contract.id, date(2024, 3, 1), status=PaymentStatus.WAITING_APPROVAL
    )

    response = await client.post(
        f"/api/payments/{payment.id}/reject",
        json={"reason": "ยอดเงินไม่ครบ"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "pending"
    assert data["rejection_reason"] == "ยอดเงินไม่ครบ"

    [notification] = await notifications_for(db, tenant.id)
    assert notification.type == NotificationType.PAYMENT_REJECTED
    assert "ยอดเงินไม่ครบ" in notification.message


async def test_tenant_cannot_approve(client, db, tenant, contract):
    payment = await make_payment(db, contract.id, date(2024, 3, 1))

    response = await client.post(
        f"/api/payments/{payment.id}/approve", headers=auth_headers(tenant)
    )
    assert response.status_code == 403


async def test_receipt_for_first_payment(client, db, owner, tenant, contract):
    payment = await make_payment(
        db,
        contract.id,
        date(2024, 1, 1),
        amount="24000",
        status=PaymentStatus.PAID,
        paid_date=date(2024, 1, 2),
        receipt_number="REC-20240102-XYZ",
    )

    response = await client.get(
        f"/api/payments/{payment.id}/receipt", headers=auth_headers(tenant)
    )

    assert response.status_code == 200
    receipt = response.json()["data"]
    assert receipt["receipt_number"] == "REC-20240102-XYZ"
    assert receipt["is_first_payment"] is True
    assert receipt["tenant_name"] == "วิชัย เช่าบ้าน"
    assert receipt["asset_name"] == "คอนโดริมน้ำ"
    assert [line["amount"] for line in receipt["lines"]] == [8000, 16000]
    assert receipt["total"] == 24000
    assert receipt["total_text"] == "สองหมื่นสี่พันบาทถ้วน"


async def test_owner_creates_extra_bill(client, owner, contract):
    response = await client.post(
        "/api/payments",
        json={
            "contract_id": contract.id,
            "amount": 650,
            "type": "other",
            "due_date": "2024-04-05",
        },
        headers=auth_headers(owner),
    )

    assert response.status_code == 201
    assert response.json()["data"]["status"] == "pending"


async def test_list_filters_by_status(client, db, owner, contract):
    await make_payment(db, contract.id, date(2024, 2, 1), status=PaymentStatus.PAID)
    overdue = await make_payment(
        db, contract.id, date(2024, 3, 1), status=PaymentStatus.OVERDUE
    )

    response = await client.get(
        "/api/payments", params={"status": "overdue"}, headers=auth_headers(owner)
    )
    assert [p["id"] for p in response.json()["data"]] == [overdue.id]
