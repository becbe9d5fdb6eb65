"""Payments: schedules, approvals, receipts and reminders."""

from .models import Payment, PaymentStatus, PaymentType

__all__ = ["Payment", "PaymentStatus", "PaymentType"]
