"""Payment schedule generation for new contracts.

The first payment collects the advance rent (the deposit) plus insurance
and is due the day the contract is created. When the deposit does not
cover a full month, the remainder is due ten days before the start date.
From the month after the start, one rent payment is due on the 1st of
every month up to the end date.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.logging import get_logger
from ...core.utils import to_decimal, utc_today
from .models import Payment, PaymentStatus, PaymentType

logger = get_logger("payments.schedule")

REMAINING_RENT_LEAD_DAYS = 10


@dataclass(frozen=True)
class ScheduledPayment:
    amount: Decimal
    type: PaymentType
    due_date: date


def _first_of_next_month(day: date) -> date:
    if day.month == 12:
        return date(day.year + 1, 1, 1)
    return date(day.year, day.month + 1, 1)


def build_payment_schedule(
    start_date: date,
    end_date: date,
    rent_amount,
    deposit=0,
    insurance=0,
    created_on: date | None = None,
) -> list[ScheduledPayment]:
    """Compute the payments owed under a contract, in due order of creation.

    >>> [p.due_date.isoformat() for p in build_payment_schedule(
    ...     date(2024, 1, 15), date(2024, 3, 31), 10000, 10000, 5000,
    ...     created_on=date(2024, 1, 2))]
    ['2024-01-02', '2024-02-01', '2024-03-01']
    """
    rent = to_decimal(rent_amount)
    deposit = to_decimal(deposit)
    insurance = to_decimal(insurance)
    created_on = created_on or utc_today()

    payments = [ScheduledPayment(deposit + insurance, PaymentType.RENT, created_on)]
    if deposit < rent:
        payments.append(
            ScheduledPayment(
                rent - deposit,
                PaymentType.RENT,
                start_date - timedelta(days=REMAINING_RENT_LEAD_DAYS),
            )
        )

    due = _first_of_next_month(start_date)
    while due <= end_date:
        payments.append(ScheduledPayment(rent, PaymentType.RENT, due))
        due = _first_of_next_month(due)
    return payments


async def insert_payment_schedule(
    db: AsyncSession, contract_id: str, schedule: list[ScheduledPayment]
) -> list[Payment]:
    """Insert scheduled payments, skipping any (due date, type) already present.

    Flushes but does not commit.
    """
    result = await db.execute(
        select(Payment.due_date, Payment.type).where(Payment.contract_id == contract_id)
    )
    existing = {(due_date, payment_type) for due_date, payment_type in result.all()}

    created = []
    for item in schedule:
        key = (item.due_date, item.type)
        if key in existing:
            continue
        existing.add(key)
        payment = Payment(
            contract_id=contract_id,
            amount=item.amount,
            type=item.type,
            due_date=item.due_date,
            status=PaymentStatus.PENDING,
            proof_images=[],
        )
        db.add(payment)
        created.append(payment)

    await db.flush()
    logger.info(
        "Payment schedule generated",
        extra={"contract_id": contract_id, "created": len(created)},
    )
    return created
