"""Daily payment reminder job.

Open rent payments past their due date are flagged ``overdue``; every
second day overdue the tenant and the owner are reminded, and tenants get
a heads-up a few days before a payment falls due. Each user receives at
most one reminder per payment, type and day, so reruns are harmless.
"""

from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...core.logging import get_logger
from ...core.utils import format_amount, utc_now, utc_today
from ..asset_management.models import Asset
from ..contract_management.models import Contract
from ..notifications.models import NotificationType
from ..notifications.services import notified_on, notify
from .models import OPEN_STATUSES, Payment, PaymentStatus, PaymentType

logger = get_logger("payments.reminders")

OVERDUE_TITLE = "แจ้งเตือนค่าเช่าค้างชำระ"
DUE_SOON_TITLE = "แจ้งเตือนค่าเช่าใกล้ครบกำหนด"
DEFAULT_ASSET_NAME = "ทรัพย์สิน"


def should_send_overdue(days_overdue: int, interval: int | None = None) -> bool:
    """Overdue reminders go out on day 2, 4, 6, ... after the due date.

    >>> [d for d in range(7) if should_send_overdue(d, 2)]
    [2, 4, 6]
    """
    interval = interval or settings.payment_overdue_interval_days
    return days_overdue >= interval and days_overdue % interval == 0


def overdue_message(amount, asset_name: str, days_overdue: int, for_tenant: bool) -> str:
    message = (
        f"ค่าเช่า {format_amount(amount)} บาท สำหรับ {asset_name} "
        f"ค้างชำระมาแล้ว {days_overdue} วัน"
    )
    if for_tenant:
        message += " กรุณาชำระโดยเร็ว"
    return message


def due_soon_message(amount, asset_name: str, due_date: date, days: int) -> str:
    return (
        f"ค่าเช่า {format_amount(amount)} บาท สำหรับ {asset_name} "
        f"ครบกำหนดชำระในอีก {days} วัน (วันที่ {due_date.isoformat()})"
    )


async def _remind_once(
    db: AsyncSession,
    user_id: str,
    notification_type: NotificationType,
    title: str,
    message: str,
    payment_id: str,
    today: date,
    run_at: datetime,
) -> bool:
    if await notified_on(db, user_id, notification_type, payment_id, today):
        return False
    await notify(
        db,
        user_id,
        notification_type,
        title,
        message,
        related_id=payment_id,
        created_at=run_at,
    )
    return True


async def run_payment_reminders(
    db: AsyncSession, today: date | None = None
) -> dict[str, int]:
    """Flag overdue payments and send reminders for ``today`` (UTC).

    Commits once at the end.

    Returns:
        Counts of payments marked overdue and notifications sent
    """
    if today is None:
        today = utc_today()
        run_at = utc_now()
    else:
        run_at = datetime.combine(today, utc_now().timetz())
    lead_days = settings.payment_reminder_days_before

    result = await db.execute(
        select(Payment, Contract.tenant_id, Asset.owner_id, Asset.name)
        .join(Contract, Contract.id == Payment.contract_id)
        .join(Asset, Asset.id == Contract.asset_id)
        .where(
            Payment.status.in_(OPEN_STATUSES),
            Payment.type == PaymentType.RENT,
        )
        .order_by(Payment.due_date)
    )

    stats = {"marked_overdue": 0, "overdue_notifications": 0, "due_soon_notifications": 0}
    for payment, tenant_id, owner_id, asset_name in result.all():
        asset_name = asset_name or DEFAULT_ASSET_NAME
        days_until_due = (payment.due_date - today).days

        if days_until_due < 0:
            if payment.status == PaymentStatus.PENDING:
                payment.status = PaymentStatus.OVERDUE
                stats["marked_overdue"] += 1

            days_overdue = -days_until_due
            if not should_send_overdue(days_overdue):
                continue
            recipients = [(tenant_id, True), (owner_id, False)]
            for user_id, for_tenant in recipients:
                sent = await _remind_once(
                    db,
                    user_id,
                    NotificationType.PAYMENT_OVERDUE,
                    OVERDUE_TITLE,
                    overdue_message(payment.amount, asset_name, days_overdue, for_tenant),
                    payment.id,
                    today,
                    run_at,
                )
                stats["overdue_notifications"] += int(sent)

        elif days_until_due == lead_days:
            sent = await _remind_once(
                db,
                tenant_id,
                NotificationType.PAYMENT_DUE_SOON,
                DUE_SOON_TITLE,
                due_soon_message(payment.amount, asset_name, payment.due_date, lead_days),
                payment.id,
                today,
                run_at,
            )
            stats["due_soon_notifications"] += int(sent)

    await db.commit()
    logger.info(
        "Payment reminders finished",
        extra={"date": today.isoformat(), **stats},
    )
    return stats
