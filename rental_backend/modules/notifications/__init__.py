"""In-app notifications."""

from .models import Notification, NotificationStatus, NotificationType

__all__ = [
    "Notification",
    "NotificationStatus",
    "NotificationType",
]
