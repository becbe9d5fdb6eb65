"""Payment business logic: visibility, proof upload, approval and receipts."""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import (
    BusinessLogicError,
    NotFoundError,
    PermissionError,
    ValidationError,
)
from ...core.logging import get_logger
from ...core.utils import format_amount, utc_today
from ..asset_management.models import Asset
from ..asset_management.services import ensure_can_manage
from ..auth import crud as user_crud
from ..auth.schemas import AuthenticatedUser
from ..contract_management.models import Contract
from ..finance.models import FinanceType
from ..finance.services import record_entry
from ..notifications.models import NotificationType
from ..notifications.services import notify
from . import crud
from .models import Payment, PaymentStatus, PaymentType
from .receipts import TYPE_LABELS, Receipt, build_receipt, make_receipt_number
from .schemas import PaymentApprove, PaymentCreate, PaymentReject, PaymentUpdate

logger = get_logger("payments")

APPROVABLE_STATUSES = (
    PaymentStatus.PENDING,
    PaymentStatus.WAITING_APPROVAL,
    PaymentStatus.OVERDUE,
)

INCOME_CATEGORY = {
    PaymentType.RENT: "rent",
    PaymentType.DEPOSIT: "rent",
    PaymentType.UTILITY: "utility",
    PaymentType.OTHER: "other",
}


def _ensure_can_view(
    current_user: AuthenticatedUser, contract: Contract, asset: Asset, action: str
):
    if current_user.is_owner and asset.owner_id != current_user.id:
        raise PermissionError(action, "payment")
    if current_user.is_tenant and contract.tenant_id != current_user.id:
        raise PermissionError(action, "payment")


async def _load(
    db: AsyncSession, current_user: AuthenticatedUser, payment_id: str, action: str
) -> tuple[Payment, Contract, Asset]:
    context = await crud.get_payment_context(db, payment_id)
    if not context:
        raise NotFoundError("Payment not found")
    payment, contract, asset = context
    _ensure_can_view(current_user, contract, asset, action)
    return payment, contract, asset


async def list_payments(
    db: AsyncSession, current_user: AuthenticatedUser, **filters
) -> list[Payment]:
    """Owners see payments on their assets, tenants their own, admins all."""
    if current_user.is_owner:
        filters["owner_id"] = current_user.id
    elif current_user.is_tenant:
        filters["tenant_id"] = current_user.id
    return await crud.list_payments(db, **filters)


async def get_payment(
    db: AsyncSession, current_user: AuthenticatedUser, payment_id: str
) -> Payment:
    payment, _, _ = await _load(db, current_user, payment_id, "view")
    return payment


async def create_payment(
    db: AsyncSession, current_user: AuthenticatedUser, data: PaymentCreate
) -> Payment:
    contract = await db.get(Contract, data.contract_id)
    if not contract:
        raise NotFoundError("Contract not found")
    asset = await db.get(Asset, contract.asset_id)
    ensure_can_manage(current_user, asset, "bill")

    payment = await crud.create_payment(
        db,
        contract_id=contract.id,
        amount=Decimal(str(data.amount)),
        type=data.type,
        due_date=data.due_date,
        status=PaymentStatus.PENDING,
        proof_images=[],
    )
    await db.commit()
    logger.info(
        "Payment created",
        extra={"payment_id": payment.id, "contract_id": contract.id},
    )
    return payment


async def update_payment(
    db: AsyncSession,
    current_user: AuthenticatedUser,
    payment_id: str,
    data: PaymentUpdate,
) -> Payment:
    """Apply the fields the caller's role is allowed to change.

    A tenant attaching proof moves the payment to ``waiting_approval`` and
    lets the owner know.
    """
    payment, contract, asset = await _load(db, current_user, payment_id, "update")
    submitted = data.model_dump(exclude_unset=True)

    fields = {}
    if current_user.is_tenant:
        if data.proof_images is not None:
            fields["proof_images"] = list(data.proof_images)
            if payment.status != PaymentStatus.PAID:
                fields["status"] = PaymentStatus.WAITING_APPROVAL
    else:
        fields = submitted
        if "proof_images" in fields and fields["proof_images"] is None:
            fields["proof_images"] = []

    if not fields:
        raise ValidationError("No fields to update")

    payment = await crud.update_payment(db, payment, **fields)

    if current_user.is_tenant and "proof_images" in fields:
        await notify(
            db,
            asset.owner_id,
            NotificationType.PAYMENT_PROOF,
            "มีหลักฐานการชำระเงินใหม่",
            f"ผู้เช่าส่งหลักฐานการชำระ{TYPE_LABELS[payment.type]} "
            f"{format_amount(payment.amount)} บาท สำหรับ {asset.name}",
            related_id=payment.id,
        )

    await db.commit()
    await db.refresh(payment)
    return payment


async def approve_payment(
    db: AsyncSession,
    current_user: AuthenticatedUser,
    payment_id: str,
    data: PaymentApprove,
) -> Payment:
    """Mark a payment paid, issue its receipt number and book the income."""
    payment, contract, asset = await _load(db, current_user, payment_id, "approve")
    ensure_can_manage(current_user, asset, "approve payments for")
    if payment.status not in APPROVABLE_STATUSES:
        raise BusinessLogicError(f"Payment is already {payment.status.value}")

    paid_date = data.paid_date or utc_today()
    receipt_number = make_receipt_number(payment.id, paid_date)
    payment = await crud.update_payment(
        db,
        payment,
        status=PaymentStatus.PAID,
        paid_date=paid_date,
        receipt_number=receipt_number,
        receipt_date=data.receipt_date or paid_date,
        payment_method=data.payment_method,
        rejection_reason=None,
    )

    await record_entry(
        db,
        FinanceType.INCOME,
        INCOME_CATEGORY[payment.type],
        payment.amount,
        f"{TYPE_LABELS[payment.type]} {asset.name} ({receipt_number})",
        paid_date,
        asset_id=asset.id,
        contract_id=contract.id,
        created_by=current_user.id,
    )
    await notify(
        db,
        contract.tenant_id,
        NotificationType.PAYMENT_APPROVED,
        "การชำระเงินได้รับการอนุมัติ",
        f"การชำระ{TYPE_LABELS[payment.type]} {format_amount(payment.amount)} บาท "
        f"สำหรับ {asset.name} ได้รับการอนุมัติแล้ว เลขที่ใบเสร็จ {receipt_number}",
        related_id=payment.id,
    )

    await db.commit()
    await db.refresh(payment)
    logger.info(
        "Payment approved",
        extra={"payment_id": payment.id, "receipt_number": receipt_number},
    )
    return payment


async def reject_payment(
    db: AsyncSession,
    current_user: AuthenticatedUser,
    payment_id: str,
    data: PaymentReject,
) -> Payment:
    payment, contract, asset = await _load(db, current_user, payment_id, "reject")
    ensure_can_manage(current_user, asset, "reject payments for")
    if payment.status == PaymentStatus.PAID:
        raise BusinessLogicError("Payment is already paid")

    payment = await crud.update_payment(
        db,
        payment,
        status=PaymentStatus.PENDING,
        rejection_reason=data.reason,
    )
    await notify(
        db,
        contract.tenant_id,
        NotificationType.PAYMENT_REJECTED,
        "การชำระเงินถูกปฏิเสธ",
        f"การชำระ{TYPE_LABELS[payment.type]} {format_amount(payment.amount)} บาท "
        f"สำหรับ {asset.name} ถูกปฏิเสธ: {data.reason}",
        related_id=payment.id,
    )

    await db.commit()
    await db.refresh(payment)
    logger.info("Payment rejected", extra={"payment_id": payment.id})
    return payment


async def get_receipt(
    db: AsyncSession, current_user: AuthenticatedUser, payment_id: str
) -> Receipt:
    payment, contract, asset = await _load(db, current_user, payment_id, "view")
    tenant = await user_crud.get_user_by_id(db, contract.tenant_id)
    return build_receipt(
        payment, contract, asset, tenant_name=tenant.name if tenant else None
    )
