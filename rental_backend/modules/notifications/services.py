"""Notification business logic.

Other modules call :func:`notify` inside their own transaction; the
notification is committed together with the change that caused it.
"""

from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError
from ...core.logging import get_logger
from ...core.utils import utc_now
from . import crud
from .models import Notification, NotificationStatus, NotificationType

logger = get_logger("notifications")


async def notify(
    db: AsyncSession,
    user_id: str,
    notification_type: NotificationType,
    title: str,
    message: str,
    related_id: str | None = None,
    created_at: datetime | None = None,
) -> Notification:
    """Queue an unread notification for a user (flushed, not committed)."""
    fields = {
        "user_id": user_id,
        "type": notification_type,
        "title": title,
        "message": message,
        "related_id": related_id,
        "status": NotificationStatus.UNREAD,
    }
    if created_at is not None:
        fields["created_at"] = created_at
    notification = await crud.create_notification(db, **fields)
    logger.info(
        "Notification created",
        extra={
            "user_id": user_id,
            "type": notification_type.value,
            "related_id": related_id,
        },
    )
    return notification


async def notified_on(
    db: AsyncSession,
    user_id: str,
    notification_type: NotificationType,
    related_id: str,
    day: date,
) -> bool:
    """Whether the user already got this notification on ``day`` (UTC)."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return await crud.exists_between(
        db, user_id, notification_type, related_id, start, start + timedelta(days=1)
    )


async def list_unread(db: AsyncSession, user_id: str) -> list[Notification]:
    return await crud.list_unread(db, user_id)


async def unread_count(db: AsyncSession, user_id: str) -> int:
    return await crud.count_unread(db, user_id)


async def mark_read(db: AsyncSession, user_id: str, notification_id: str) -> Notification:
    """Mark one of the user's notifications as read."""
    notification = await crud.get_user_notification(db, notification_id, user_id)
    if not notification:
        raise NotFoundError("Notification not found")

    if notification.status != NotificationStatus.READ:
        notification.status = NotificationStatus.READ
        notification.read_at = utc_now()
        await db.commit()
        await db.refresh(notification)
    return notification


async def mark_all_read(db: AsyncSession, user_id: str) -> int:
    count = await crud.mark_all_read(db, user_id, utc_now())
    await db.commit()
    return count
