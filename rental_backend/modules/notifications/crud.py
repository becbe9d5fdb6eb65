"""CRUD operations for notifications."""

from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Notification, NotificationStatus, NotificationType


async def create_notification(db: AsyncSession, **fields) -> Notification:
    notification = Notification(**fields)
    db.add(notification)
    await db.flush()
    return notification


async def list_unread(db: AsyncSession, user_id: str) -> list[Notification]:
    result = await db.execute(
        select(Notification)
        .where(
            Notification.user_id == user_id,
            Notification.status == NotificationStatus.UNREAD,
        )
        .order_by(Notification.created_at.desc())
    )
    return list(result.scalars().all())


async def count_unread(db: AsyncSession, user_id: str) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(Notification)
        .where(
            Notification.user_id == user_id,
            Notification.status == NotificationStatus.UNREAD,
        )
    )
    return result.scalar_one()


async def get_user_notification(
    db: AsyncSession, notification_id: str, user_id: str
) -> Notification | None:
    result = await db.execute(
        select(Notification).where(
            Notification.id == notification_id, Notification.user_id == user_id
        )
    )
    return result.scalar_one_or_none()


async def mark_all_read(db: AsyncSession, user_id: str, read_at: datetime) -> int:
    result = await db.execute(
        update(Notification)
        .where(
            Notification.user_id == user_id,
            Notification.status == NotificationStatus.UNREAD,
        )
        .values(status=NotificationStatus.READ, read_at=read_at)
    )
    return result.rowcount


async def exists_between(
    db: AsyncSession,
    user_id: str,
    notification_type: NotificationType,
    related_id: str,
    start: datetime,
    end: datetime,
) -> bool:
    """Whether the user already got this kind of message about ``related_id``
    with a creation time in ``[start, end)``."""
    result = await db.execute(
        select(Notification.id)
        .where(
            Notification.user_id == user_id,
            Notification.type == notification_type,
            Notification.related_id == related_id,
            Notification.created_at >= start,
            Notification.created_at < end,
        )
        .limit(1)
    )
    return result.scalar_one_or_none() is not None
