"""Notification schemas."""

from datetime import datetime

from pydantic import BaseModel

from .models import NotificationStatus, NotificationType


class NotificationResponse(BaseModel):
    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    related_id: str | None = None
    status: NotificationStatus
    created_at: datetime
    read_at: datetime | None = None

    class Config:
        from_attributes = True


class UnreadCountResponse(BaseModel):
    count: int
