"""Financial record business logic."""

from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, PermissionError, ValidationError
from ...core.logging import get_logger
from ..asset_management import crud as asset_crud
from ..asset_management.services import ensure_can_manage
from ..auth.schemas import AuthenticatedUser
from . import crud
from .models import EXPENSE_CATEGORIES, INCOME_CATEGORIES, FinanceType, FinancialRecord
from .schemas import FinanceSummary, FinancialRecordCreate, FinancialRecordUpdate

logger = get_logger("finance")


def _scope(current_user: AuthenticatedUser) -> str | None:
    return None if current_user.is_admin else current_user.id


async def record_entry(
    db: AsyncSession,
    finance_type: FinanceType,
    category: str,
    amount,
    description: str,
    on_date: date,
    asset_id: str | None = None,
    contract_id: str | None = None,
    created_by: str | None = None,
) -> FinancialRecord:
    """Write a record inside the caller's transaction (flushed, not committed)."""
    record = await crud.create_record(
        db,
        type=finance_type,
        category=category,
        amount=Decimal(str(amount)),
        description=description,
        date=on_date,
        asset_id=asset_id,
        contract_id=contract_id,
        created_by=created_by,
    )
    logger.info(
        "Financial record written",
        extra={
            "record_id": record.id,
            "type": finance_type.value,
            "category": category,
            "asset_id": asset_id,
        },
    )
    return record


async def _check_asset(db: AsyncSession, current_user: AuthenticatedUser, asset_id):
    if not asset_id:
        return
    asset = await asset_crud.get_asset(db, asset_id)
    if not asset:
        raise NotFoundError("Asset not found")
    ensure_can_manage(current_user, asset, "record finances for")


async def _get_visible_record(
    db: AsyncSession, current_user: AuthenticatedUser, record_id: str, action: str
) -> FinancialRecord:
    record = await crud.get_record(db, record_id)
    if not record:
        raise NotFoundError("Financial record not found")
    if current_user.is_admin or record.created_by == current_user.id:
        return record
    if record.asset_id:
        asset = await asset_crud.get_asset(db, record.asset_id)
        if asset and asset.owner_id == current_user.id:
            return record
    raise PermissionError(action, "financial record")


async def list_records(
    db: AsyncSession,
    current_user: AuthenticatedUser,
    finance_type: FinanceType | None = None,
    asset_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[FinancialRecord]:
    return await crud.list_records(
        db,
        owner_id=_scope(current_user),
        finance_type=finance_type,
        asset_id=asset_id,
        date_from=date_from,
        date_to=date_to,
    )


async def get_record(
    db: AsyncSession, current_user: AuthenticatedUser, record_id: str
) -> FinancialRecord:
    return await _get_visible_record(db, current_user, record_id, "view")


async def create_record(
    db: AsyncSession, current_user: AuthenticatedUser, data: FinancialRecordCreate
) -> FinancialRecord:
    await _check_asset(db, current_user, data.asset_id)
    record = await record_entry(
        db,
        data.type,
        data.category,
        data.amount,
        data.description,
        data.date,
        asset_id=data.asset_id,
        contract_id=data.contract_id,
        created_by=current_user.id,
    )
    await db.commit()
    return record


async def update_record(
    db: AsyncSession,
    current_user: AuthenticatedUser,
    record_id: str,
    data: FinancialRecordUpdate,
) -> FinancialRecord:
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        raise ValidationError("No fields to update")

    record = await _get_visible_record(db, current_user, record_id, "update")
    if fields.get("asset_id"):
        await _check_asset(db, current_user, fields["asset_id"])

    finance_type = fields.get("type") or record.type
    category = fields.get("category") or record.category
    allowed = INCOME_CATEGORIES if finance_type == FinanceType.INCOME else EXPENSE_CATEGORIES
    if category not in allowed:
        raise ValidationError(
            f"category '{category}' is not valid for {finance_type.value}",
            field="category",
            value=category,
        )

    if "amount" in fields:
        fields["amount"] = Decimal(str(fields["amount"]))
    record = await crud.update_record(db, record, **fields)
    await db.commit()
    return record


async def delete_record(
    db: AsyncSession, current_user: AuthenticatedUser, record_id: str
) -> None:
    record = await _get_visible_record(db, current_user, record_id, "delete")
    await crud.delete_record(db, record)
    await db.commit()
    logger.info("Financial record deleted", extra={"record_id": record_id})


async def summarize(
    db: AsyncSession,
    current_user: AuthenticatedUser,
    asset_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> FinanceSummary:
    totals = await crud.sum_by_type(
        db,
        owner_id=_scope(current_user),
        asset_id=asset_id,
        date_from=date_from,
        date_to=date_to,
    )
    income = totals.get(FinanceType.INCOME, 0.0)
    expense = totals.get(FinanceType.EXPENSE, 0.0)
    return FinanceSummary(income=income, expense=expense, net=income - expense)
