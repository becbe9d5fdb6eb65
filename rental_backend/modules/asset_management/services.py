"""Asset business logic: visibility rules, CRUD and unit subdivision."""

import re
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, PermissionError, ValidationError
from ...core.logging import get_logger
from ...core.utils import utc_now
from ..auth import crud as user_crud
from ..auth.schemas import AuthenticatedUser
from . import crud
from .models import Asset, AssetStatus, AssetType
from .schemas import AssetCreate, AssetUpdate, UnitsCreate

logger = get_logger("assets")

UNIT_VALUE_PER_SQM = Decimal("50000")


def ensure_can_manage(current_user: AuthenticatedUser, asset: Asset, action: str):
    """Owners may manage only their own assets; admins manage all."""
    if current_user.is_admin:
        return
    if current_user.is_owner and asset.owner_id == current_user.id:
        return
    raise PermissionError(action, "asset")


async def get_managed_asset(
    db: AsyncSession, current_user: AuthenticatedUser, asset_id: str, action: str
) -> Asset:
    asset = await crud.get_asset(db, asset_id)
    if not asset:
        raise NotFoundError("Asset not found")
    ensure_can_manage(current_user, asset, action)
    return asset


async def list_assets(db: AsyncSession, current_user: AuthenticatedUser) -> list[Asset]:
    """Owners see their own assets, tenants the ones they rent, admins all."""
    if current_user.is_owner:
        return await crud.list_assets(db, owner_id=current_user.id)
    if current_user.is_tenant:
        return await crud.list_assets(db, tenant_id=current_user.id)
    return await crud.list_assets(db)


async def get_asset(
    db: AsyncSession, current_user: AuthenticatedUser, asset_id: str
) -> Asset:
    asset = await crud.get_asset(db, asset_id)
    if not asset:
        raise NotFoundError("Asset not found")

    if current_user.is_owner and asset.owner_id != current_user.id:
        raise PermissionError("view", "asset")
    if current_user.is_tenant and not await crud.tenant_has_active_contract(
        db, asset_id, current_user.id
    ):
        raise PermissionError("view", "asset")
    return asset


def _history_as_dicts(history) -> list[dict] | None:
    if history is None:
        return None
    return [entry.model_dump() for entry in history]


async def create_asset(
    db: AsyncSession, current_user: AuthenticatedUser, data: AssetCreate
) -> Asset:
    owner_id = current_user.id
    if current_user.is_admin and data.owner_id:
        if not await user_crud.get_user_by_id(db, data.owner_id):
            raise NotFoundError("Owner not found")
        owner_id = data.owner_id

    fields = data.model_dump(exclude={"owner_id", "development_history"})
    asset = await crud.create_asset(
        db,
        owner_id=owner_id,
        child_assets=[],
        development_history=_history_as_dicts(data.development_history),
        **fields,
    )
    await db.commit()
    logger.info("Asset created", extra={"asset_id": asset.id, "owner_id": owner_id})
    return asset


async def update_asset(
    db: AsyncSession, current_user: AuthenticatedUser, asset_id: str, data: AssetUpdate
) -> Asset:
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        raise ValidationError("No fields to update")
    if "development_history" in fields:
        fields["development_history"] = _history_as_dicts(data.development_history)

    asset = await get_managed_asset(db, current_user, asset_id, "update")
    asset = await crud.update_asset(db, asset, **fields)
    await db.commit()
    return asset


async def delete_asset(
    db: AsyncSession, current_user: AuthenticatedUser, asset_id: str
) -> None:
    asset = await get_managed_asset(db, current_user, asset_id, "delete")
    await crud.delete_asset(db, asset)
    await db.commit()
    logger.info("Asset deleted", extra={"asset_id": asset_id})


def parse_start_number(unit_prefix: str) -> int:
    """Leading digits of the prefix, or 1 when there are none (or zero).

    >>> parse_start_number("101")
    101
    >>> parse_start_number("A")
    1
    """
    match = re.match(r"\s*(\d+)", unit_prefix or "")
    number = int(match.group(1)) if match else 0
    return number or 1


async def create_units(
    db: AsyncSession,
    current_user: AuthenticatedUser,
    parent_asset_id: str,
    data: UnitsCreate,
) -> list[Asset]:
    """Create rental units inside a parent asset.

    Units are named ``"<parent> - ห้อง NNN"`` with zero-padded numbers
    counting up from the prefix, inherit the parent's location and start
    out available. The parent's unit count, child list and development
    history are updated in the same transaction.
    """
    parent = await get_managed_asset(db, current_user, parent_asset_id, "subdivide")
    if not parent.is_parent:
        raise ValidationError("Asset is not a parent asset", field="is_parent")

    start = parse_start_number(data.unit_prefix)
    unit_size = Decimal(str(data.unit_size))
    units = []
    for offset in range(data.number_of_units):
        unit_number = str(start + offset).zfill(3)
        unit = Asset(
            owner_id=parent.owner_id,
            type=AssetType.APARTMENT,
            name=f"{parent.name} - ห้อง {unit_number}",
            address=parent.address,
            district=parent.district,
            amphoe=parent.amphoe,
            province=parent.province,
            postal_code=parent.postal_code,
            size=unit_size,
            rooms=data.rooms,
            purchase_price=Decimal("0"),
            current_value=unit_size * UNIT_VALUE_PER_SQM,
            status=AssetStatus.AVAILABLE,
            images=[],
            documents=[],
            latitude=parent.latitude,
            longitude=parent.longitude,
            description=f"ห้องเช่า {unit_number} ใน{parent.name}",
            parent_asset_id=parent.id,
            is_parent=False,
            child_assets=[],
            unit_number=unit_number,
        )
        db.add(unit)
        units.append(unit)
    await db.flush()

    # JSON columns are replaced, not mutated, so the change is tracked
    parent.total_units = (parent.total_units or 0) + data.number_of_units
    parent.child_assets = [*(parent.child_assets or []), *(u.id for u in units)]
    parent.development_history = [
        *(parent.development_history or []),
        {
            "date": utc_now().isoformat(),
            "action": "units_created",
            "description": f"สร้างห้องเช่า {data.number_of_units} ห้อง",
        },
    ]
    await db.commit()
    for unit in units:
        await db.refresh(unit)

    logger.info(
        "Units created",
        extra={"parent_asset_id": parent.id, "count": len(units)},
    )
    return units
