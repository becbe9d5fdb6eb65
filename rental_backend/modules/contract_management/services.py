"""Contract business logic.

Creating, changing or deleting a contract keeps the asset's occupancy
status in step (see ``status_reconciler.sync_asset_status``) and new
contracts get their payment schedule in the same transaction.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, PermissionError, ValidationError
from ...core.logging import get_logger
from ...core.utils import utc_today
from ..asset_management import crud as asset_crud
from ..asset_management.services import ensure_can_manage
from ..asset_management.status_reconciler import sync_asset_status
from ..auth import crud as user_crud
from ..auth.models import UserRole
from ..auth.schemas import AuthenticatedUser
from ..payment_management.schedule import build_payment_schedule, insert_payment_schedule
from . import crud
from .models import Contract
from .schemas import ContractCreate, ContractUpdate

logger = get_logger("contracts")

MONEY_FIELDS = ("rent_amount", "deposit", "insurance")


async def next_contract_number(db: AsyncSession, today=None) -> str:
    """``CT-YYYYMMDD-NNNN``, numbered per day starting at 0001.

    Continues after the highest number issued that day, so numbers freed
    by deleted contracts are never handed out again.
    """
    prefix = crud.contract_number_prefix(today or utc_today())
    last = await crud.last_number_with_prefix(db, prefix)
    suffix = last[len(prefix):] if last else ""
    sequence = int(suffix) if suffix.isdigit() else 0
    return f"{prefix}{sequence + 1:04d}"


async def list_contracts(
    db: AsyncSession, current_user: AuthenticatedUser, **filters
) -> list[Contract]:
    """Owners see contracts on their assets, tenants their own, admins all."""
    if current_user.is_owner:
        filters["owner_id"] = current_user.id
    elif current_user.is_tenant:
        filters["tenant_id"] = current_user.id
    return await crud.list_contracts(db, **filters)


async def get_contract(
    db: AsyncSession, current_user: AuthenticatedUser, contract_id: str
) -> Contract:
    contract = await crud.get_contract(db, contract_id)
    if not contract:
        raise NotFoundError("Contract not found")

    if current_user.is_tenant and contract.tenant_id != current_user.id:
        raise PermissionError("view", "contract")
    if current_user.is_owner:
        asset = await asset_crud.get_asset(db, contract.asset_id)
        if asset.owner_id != current_user.id:
            raise PermissionError("view", "contract")
    return contract


async def _get_managed_contract(
    db: AsyncSession, current_user: AuthenticatedUser, contract_id: str, action: str
) -> Contract:
    contract = await crud.get_contract(db, contract_id)
    if not contract:
        raise NotFoundError("Contract not found")
    asset = await asset_crud.get_asset(db, contract.asset_id)
    ensure_can_manage(current_user, asset, action)
    return contract


def _to_money(fields: dict) -> dict:
    for key in MONEY_FIELDS:
        if fields.get(key) is not None:
            fields[key] = Decimal(str(fields[key]))
    return fields


async def create_contract(
    db: AsyncSession, current_user: AuthenticatedUser, data: ContractCreate
) -> Contract:
    asset = await asset_crud.get_asset(db, data.asset_id)
    if not asset:
        raise NotFoundError("Asset not found")
    ensure_can_manage(current_user, asset, "lease")

    tenant = await user_crud.get_user_by_id(db, data.tenant_id)
    if not tenant:
        raise NotFoundError("Tenant not found")
    if tenant.role != UserRole.TENANT:
        raise ValidationError("User is not a tenant", field="tenant_id", value=tenant.id)

    today = utc_today()
    contract = await crud.create_contract(
        db,
        contract_number=await next_contract_number(db, today),
        **_to_money(data.model_dump()),
    )

    schedule = build_payment_schedule(
        contract.start_date,
        contract.end_date,
        contract.rent_amount,
        contract.deposit,
        contract.insurance,
        created_on=today,
    )
    await insert_payment_schedule(db, contract.id, schedule)
    await sync_asset_status(db, asset.id, today)
    await db.commit()

    logger.info(
        "Contract created",
        extra={
            "contract_id": contract.id,
            "contract_number": contract.contract_number,
            "asset_id": asset.id,
            "tenant_id": tenant.id,
        },
    )
    return await crud.get_contract(db, contract.id)


async def update_contract(
    db: AsyncSession,
    current_user: AuthenticatedUser,
    contract_id: str,
    data: ContractUpdate,
) -> Contract:
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        raise ValidationError("No fields to update")

    contract = await _get_managed_contract(db, current_user, contract_id, "update")
    start_date = fields.get("start_date") or contract.start_date
    end_date = fields.get("end_date") or contract.end_date
    if end_date < start_date:
        raise ValidationError("end_date must not be before start_date", field="end_date")

    contract = await crud.update_contract(db, contract, **_to_money(fields))
    await sync_asset_status(db, contract.asset_id)
    await db.commit()

    logger.info(
        "Contract updated",
        extra={"contract_id": contract.id, "fields": sorted(fields)},
    )
    return await crud.get_contract(db, contract.id)


async def delete_contract(
    db: AsyncSession, current_user: AuthenticatedUser, contract_id: str
) -> None:
    contract = await _get_managed_contract(db, current_user, contract_id, "delete")
    asset_id = contract.asset_id
    await crud.delete_contract(db, contract)
    await sync_asset_status(db, asset_id)
    await db.commit()
    logger.info("Contract deleted", extra={"contract_id": contract_id})
