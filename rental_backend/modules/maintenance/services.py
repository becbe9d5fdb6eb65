"""Maintenance business logic and the notifications it triggers."""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError, PermissionError, ValidationError
from ...core.logging import get_logger
from ...core.utils import utc_today
from ..asset_management import crud as asset_crud
from ..asset_management.services import ensure_can_manage
from ..auth import crud as user_crud
from ..auth.models import UserRole
from ..auth.schemas import AuthenticatedUser
from ..finance.models import FinanceType
from ..finance.services import record_entry
from ..notifications.models import NotificationType
from ..notifications.services import notify
from . import crud
from .models import Maintenance, MaintenanceStatus, MaintenanceType
from .schemas import MaintenanceCreate, MaintenanceUpdate

logger = get_logger("maintenance")

DEFAULT_ASSET_NAME = "ทรัพย์สิน"

EXPENSE_CATEGORY = {
    MaintenanceType.REPAIR: "repair",
    MaintenanceType.EMERGENCY: "repair",
    MaintenanceType.ROUTINE: "maintenance",
}


def accepted_message(title: str, asset_name: str, scheduled_date=None) -> str:
    message = f'การแจ้งซ่อม "{title}" สำหรับ {asset_name} ถูกรับเรื่องแล้ว'
    if scheduled_date:
        message += f" และนัดหมายเข้าไปซ่อมในวันที่ {scheduled_date.isoformat()}"
    return message


def completed_message(title: str, asset_name: str) -> str:
    return f'การซ่อม "{title}" สำหรับ {asset_name} เสร็จสิ้นแล้ว'


async def list_requests(
    db: AsyncSession, current_user: AuthenticatedUser, **filters
) -> list[Maintenance]:
    """Owners see requests on their assets, tenants their own reports."""
    if current_user.is_owner:
        filters["owner_id"] = current_user.id
    elif current_user.is_tenant:
        filters["reported_by"] = current_user.id
    return await crud.list_requests(db, **filters)


async def get_request(
    db: AsyncSession, current_user: AuthenticatedUser, request_id: str
) -> Maintenance:
    request = await crud.get_request(db, request_id)
    if not request:
        raise NotFoundError("Maintenance request not found")

    if current_user.is_tenant and request.reported_by != current_user.id:
        raise PermissionError("view", "maintenance request")
    if current_user.is_owner:
        asset = await asset_crud.get_asset(db, request.asset_id)
        if asset.owner_id != current_user.id:
            raise PermissionError("view", "maintenance request")
    return request


async def create_request(
    db: AsyncSession, current_user: AuthenticatedUser, data: MaintenanceCreate
) -> Maintenance:
    """Report a maintenance need.

    Tenants may only report on assets they rent under an active contract;
    the owner is notified of their report.
    """
    asset = await asset_crud.get_asset(db, data.asset_id)
    if not asset:
        raise NotFoundError("Asset not found")

    if current_user.is_tenant:
        if not await asset_crud.tenant_has_active_contract(db, asset.id, current_user.id):
            raise PermissionError("report maintenance for", "asset")
    elif current_user.is_owner:
        ensure_can_manage(current_user, asset, "report maintenance for")

    request = await crud.create_request(
        db,
        asset_id=asset.id,
        type=data.type,
        title=data.title,
        description=data.description,
        cost=Decimal(str(data.cost)),
        status=MaintenanceStatus.PENDING,
        reported_by=current_user.id,
        images=list(data.images),
    )

    if current_user.is_tenant:
        await notify(
            db,
            asset.owner_id,
            NotificationType.MAINTENANCE_REQUEST,
            "มีการแจ้งซ่อมใหม่",
            f"{current_user.name} แจ้งซ่อม: {data.title} สำหรับ {asset.name or DEFAULT_ASSET_NAME}",
            related_id=request.id,
        )

    await db.commit()
    logger.info(
        "Maintenance reported",
        extra={"maintenance_id": request.id, "asset_id": asset.id},
    )
    return await crud.get_request(db, request.id)


async def update_request(
    db: AsyncSession,
    current_user: AuthenticatedUser,
    request_id: str,
    data: MaintenanceUpdate,
) -> Maintenance:
    """Update progress on a request.

    The reporting tenant hears when a pending request is accepted or
    scheduled and when it is completed. Completing a request with a cost
    books it as an expense of the asset.
    """
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        raise ValidationError("No fields to update")

    request = await crud.get_request(db, request_id)
    if not request:
        raise NotFoundError("Maintenance request not found")
    asset = await asset_crud.get_asset(db, request.asset_id)
    ensure_can_manage(current_user, asset, "update maintenance for")

    old_status = request.status
    if "cost" in fields:
        fields["cost"] = Decimal(str(fields["cost"]))
    if "images" in fields and fields["images"] is None:
        fields["images"] = []
    completing = (
        fields.get("status") == MaintenanceStatus.COMPLETED
        and old_status != MaintenanceStatus.COMPLETED
    )
    if completing and not fields.get("completed_date") and not request.completed_date:
        fields["completed_date"] = utc_today()

    request = await crud.update_request(db, request, **fields)
    asset_name = asset.name or DEFAULT_ASSET_NAME

    tenant_id = None
    if request.reported_by:
        reporter = await user_crud.get_user_by_id(db, request.reported_by)
        if reporter and reporter.role == UserRole.TENANT:
            tenant_id = reporter.id

    accepted = old_status == MaintenanceStatus.PENDING and (
        request.status == MaintenanceStatus.IN_PROGRESS
        or fields.get("scheduled_date") is not None
    )
    if tenant_id and accepted:
        await notify(
            db,
            tenant_id,
            NotificationType.MAINTENANCE_REQUEST,
            "การแจ้งซ่อมถูกรับเรื่อง",
            accepted_message(request.title, asset_name, request.scheduled_date),
            related_id=request.id,
        )
    if tenant_id and completing:
        await notify(
            db,
            tenant_id,
            NotificationType.MAINTENANCE_REQUEST,
            "การซ่อมเสร็จสิ้น",
            completed_message(request.title, asset_name),
            related_id=request.id,
        )
    if completing and request.cost and request.cost > 0:
        await record_entry(
            db,
            FinanceType.EXPENSE,
            EXPENSE_CATEGORY[request.type],
            request.cost,
            f"ค่าซ่อม: {request.title} ({asset_name})",
            request.completed_date,
            asset_id=asset.id,
            created_by=current_user.id,
        )

    await db.commit()
    logger.info(
        "Maintenance updated",
        extra={
            "maintenance_id": request.id,
            "from_status": old_status.value,
            "to_status": request.status.value,
        },
    )
    return await crud.get_request(db, request.id)


async def delete_request(
    db: AsyncSession, current_user: AuthenticatedUser, request_id: str
) -> None:
    request = await crud.get_request(db, request_id)
    if not request:
        raise NotFoundError("Maintenance request not found")
    asset = await asset_crud.get_asset(db, request.asset_id)
    ensure_can_manage(current_user, asset, "delete maintenance for")
    await crud.delete_request(db, request)
    await db.commit()
    logger.info("Maintenance deleted", extra={"maintenance_id": request_id})
