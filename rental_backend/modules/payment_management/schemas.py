"""Payment schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .models import PaymentStatus, PaymentType


class PaymentCreate(BaseModel):
    contract_id: str
    amount: float = Field(..., gt=0)
    type: PaymentType
    due_date: date


class PaymentUpdate(BaseModel):
    """Tenants may only attach proof; owners and admins manage the rest."""

    proof_images: list[str] | None = None
    status: PaymentStatus | None = None
    paid_date: date | None = None
    receipt_number: str | None = Field(None, max_length=50)
    receipt_date: date | None = None
    payment_method: str | None = Field(None, max_length=50)


class PaymentApprove(BaseModel):
    paid_date: date | None = None
    receipt_date: date | None = None
    payment_method: str | None = Field(None, max_length=50)


class PaymentReject(BaseModel):
    reason: str = Field(..., min_length=1)


class PaymentResponse(BaseModel):
    id: str
    contract_id: str
    amount: float
    type: PaymentType
    due_date: date
    paid_date: date | None = None
    status: PaymentStatus
    proof_images: list[str] = []
    receipt_number: str | None = None
    receipt_date: date | None = None
    payment_method: str | None = None
    rejection_reason: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReminderRunResult(BaseModel):
    run_date: date
    marked_overdue: int = 0
    overdue_notifications: int = 0
    due_soon_notifications: int = 0
