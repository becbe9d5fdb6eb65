"""Notification API routes. Every route acts on the caller's own inbox."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser
from ..commons import BaseResponse, CountResponse
from . import services
from .schemas import NotificationResponse, UnreadCountResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=BaseResponse[list[NotificationResponse]])
async def list_notifications(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Unread notifications of the current user, newest first."""
    notifications = await services.list_unread(db, current_user.id)
    return BaseResponse(
        success=True,
        data=[NotificationResponse.model_validate(n) for n in notifications],
    )


@router.get("/unread-count", response_model=BaseResponse[UnreadCountResponse])
async def unread_count(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    count = await services.unread_count(db, current_user.id)
    return BaseResponse(success=True, data=UnreadCountResponse(count=count))


@router.put("/read-all", response_model=BaseResponse[CountResponse])
async def mark_all_read(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    count = await services.mark_all_read(db, current_user.id)
    return BaseResponse(
        success=True,
        message=f"Marked {count} notification(s) as read",
        data=CountResponse(count=count),
    )


@router.put("/{notification_id}/read", response_model=BaseResponse[NotificationResponse])
async def mark_read(
    notification_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    notification = await services.mark_read(db, current_user.id, notification_id)
    return BaseResponse(
        success=True, data=NotificationResponse.model_validate(notification)
    )
