"""Tests for payment schedule generation."""

from datetime import date
from decimal import Decimal

from sqlalchemy import select

from conftest import make_asset, make_contract
from rental_backend.modules.payment_management.models import Payment, PaymentType
from rental_backend.modules.payment_management.schedule import (
    build_payment_schedule,
    insert_payment_schedule,
)


def test_schedule_with_partial_deposit():
    schedule = build_payment_schedule(
        date(2024, 1, 15),
        date(2024, 6, 30),
        rent_amount=10000,
        deposit=5000,
        insurance=5000,
        created_on=date(2024, 1, 2),
    )

    assert [(p.due_date, p.amount) for p in schedule] == [
        (date(2024, 1, 2), Decimal("10000")),
        (date(2024, 1, 5), Decimal("5000")),
        (date(2024, 2, 1), Decimal("10000")),
        (date(2024, 3, 1), Decimal("10000")),
        (date(2024, 4, 1), Decimal("10000")),
        (date(2024, 5, 1), Decimal("10000")),
        (date(2024, 6, 1), Decimal("10000")),
    ]
    assert all(p.type == PaymentType.RENT for p in schedule)


def test_full_deposit_skips_remaining_rent_payment():
    schedule = build_payment_schedule(
        date(2024, 3, 1),
        date(2024, 4, 30),
        rent_amount=8000,
        deposit=8000,
        insurance=16000,
        created_on=date(2024, 2, 20),
    )
    assert [p.due_date for p in schedule] == [date(2024, 2, 20), date(2024, 4, 1)]
    assert schedule[0].amount == Decimal("24000")


def test_schedule_crosses_year_end():
    schedule = build_payment_schedule(
        date(2024, 12, 10),
        date(2025, 2, 1),
        rent_amount=5000,
        deposit=5000,
        created_on=date(2024, 12, 1),
    )
    assert [p.due_date for p in schedule] == [
        date(2024, 12, 1),
        date(2025, 1, 1),
        date(2025, 2, 1),
    ]


def test_contract_ending_in_its_first_month_has_no_monthly_payments():
    schedule = build_payment_schedule(
        date(2024, 5, 1),
        date(2024, 5, 31),
        rent_amount=5000,
        deposit=5000,
        created_on=date(2024, 4, 25),
    )
    assert len(schedule) == 1


async def test_insert_skips_existing_due_dates(db, owner, tenant):
    asset = await make_asset(db, owner.id)
    contract = await make_contract(
        db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 3, 31)
    )
    schedule = build_payment_schedule(
        contract.start_date,
        contract.end_date,
        contract.rent_amount,
        contract.deposit,
        contract.insurance,
        created_on=date(2023, 12, 20),
    )

    first = await insert_payment_schedule(db, contract.id, schedule)
    await db.commit()
    second = await insert_payment_schedule(db, contract.id, schedule)
    await db.commit()

    result = await db.execute(select(Payment).where(Payment.contract_id == contract.id))
    assert len(first) == 3
    assert second == []
    assert len(result.scalars().all()) == 3
