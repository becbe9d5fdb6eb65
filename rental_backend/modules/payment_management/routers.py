"""Payment API routes."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.utils import utc_today
from ...database import get_db
from ..auth.dependencies import AdminUser, CurrentUser, OwnerOrAdminUser
from ..commons import BaseResponse
from . import services
from .models import PaymentStatus
from .receipts import Receipt
from .reminders import run_payment_reminders
from .schemas import (
    PaymentApprove,
    PaymentCreate,
    PaymentReject,
    PaymentResponse,
    PaymentUpdate,
    ReminderRunResult,
)

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.get("", response_model=BaseResponse[list[PaymentResponse]])
async def list_payments(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    contract_id: str | None = None,
    payment_status: PaymentStatus | None = Query(None, alias="status"),
):
    """Payments visible to the current user, latest due date first."""
    payments = await services.list_payments(
        db, current_user, contract_id=contract_id, status=payment_status
    )
    return BaseResponse(
        success=True, data=[PaymentResponse.model_validate(p) for p in payments]
    )


@router.post("/reminders", response_model=BaseResponse[ReminderRunResult])
async def send_reminders(
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    on_date: date | None = Query(None, alias="date"),
):
    """Run the daily overdue / due-soon reminder job on demand."""
    stats = await run_payment_reminders(db, on_date)
    return BaseResponse(
        success=True,
        data=ReminderRunResult(run_date=on_date or utc_today(), **stats),
    )


@router.get("/{payment_id}", response_model=BaseResponse[PaymentResponse])
async def get_payment(
    payment_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    payment = await services.get_payment(db, current_user, payment_id)
    return BaseResponse(success=True, data=PaymentResponse.model_validate(payment))


@router.post(
    "", response_model=BaseResponse[PaymentResponse], status_code=status.HTTP_201_CREATED
)
async def create_payment(
    payment_data: PaymentCreate,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    payment = await services.create_payment(db, current_user, payment_data)
    return BaseResponse(
        success=True,
        message="Payment created successfully",
        data=PaymentResponse.model_validate(payment),
    )


@router.put("/{payment_id}", response_model=BaseResponse[PaymentResponse])
async def update_payment(
    payment_id: str,
    payment_data: PaymentUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    payment = await services.update_payment(db, current_user, payment_id, payment_data)
    return BaseResponse(
        success=True,
        message="Payment updated successfully",
        data=PaymentResponse.model_validate(payment),
    )


@router.post("/{payment_id}/approve", response_model=BaseResponse[PaymentResponse])
async def approve_payment(
    payment_id: str,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    approval: PaymentApprove | None = None,
):
    payment = await services.approve_payment(
        db, current_user, payment_id, approval or PaymentApprove()
    )
    return BaseResponse(
        success=True,
        message="Payment approved",
        data=PaymentResponse.model_validate(payment),
    )


@router.post("/{payment_id}/reject", response_model=BaseResponse[PaymentResponse])
async def reject_payment(
    payment_id: str,
    rejection: PaymentReject,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    payment = await services.reject_payment(db, current_user, payment_id, rejection)
    return BaseResponse(
        success=True,
        message="Payment rejected",
        data=PaymentResponse.model_validate(payment),
    )


@router.get("/{payment_id}/receipt", response_model=BaseResponse[Receipt])
async def get_receipt(
    payment_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Itemized receipt with the total spelled out in Thai."""
    receipt = await services.get_receipt(db, current_user, payment_id)
    return BaseResponse(success=True, data=receipt)
