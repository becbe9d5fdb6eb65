"""CRUD operations for maintenance requests."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..asset_management.models import Asset
from ..auth.models import User
from .models import Maintenance, MaintenanceStatus

OPEN_STATUSES = (MaintenanceStatus.PENDING, MaintenanceStatus.IN_PROGRESS)


def _with_names():
    return (
        select(Maintenance, Asset.name, User.name)
        .join(Asset, Asset.id == Maintenance.asset_id, isouter=True)
        .join(User, User.id == Maintenance.reported_by, isouter=True)
    )


def _attach_names(rows) -> list[Maintenance]:
    requests = []
    for request, asset_name, reporter_name in rows:
        request.asset_name = asset_name
        request.reported_by_name = reporter_name
        requests.append(request)
    return requests


async def get_request(db: AsyncSession, request_id: str) -> Maintenance | None:
    result = await db.execute(_with_names().where(Maintenance.id == request_id))
    requests = _attach_names(result.all())
    return requests[0] if requests else None


async def list_requests(
    db: AsyncSession,
    owner_id: str | None = None,
    reported_by: str | None = None,
    asset_id: str | None = None,
    status: MaintenanceStatus | None = None,
) -> list[Maintenance]:
    """List requests newest first, with asset and reporter names."""
    query = _with_names()
    if owner_id:
        query = query.where(Asset.owner_id == owner_id)
    if reported_by:
        query = query.where(Maintenance.reported_by == reported_by)
    if asset_id:
        query = query.where(Maintenance.asset_id == asset_id)
    if status:
        query = query.where(Maintenance.status == status)
    result = await db.execute(query.order_by(Maintenance.created_at.desc()))
    return _attach_names(result.all())


async def count_open(
    db: AsyncSession, owner_id: str | None = None, reported_by: str | None = None
) -> int:
    query = (
        select(func.count())
        .select_from(Maintenance)
        .where(Maintenance.status.in_(OPEN_STATUSES))
    )
    if owner_id:
        query = query.join(Asset, Asset.id == Maintenance.asset_id).where(
            Asset.owner_id == owner_id
        )
    if reported_by:
        query = query.where(Maintenance.reported_by == reported_by)
    result = await db.execute(query)
    return result.scalar_one()


async def create_request(db: AsyncSession, **fields) -> Maintenance:
    request = Maintenance(**fields)
    db.add(request)
    await db.flush()
    return request


async def update_request(db: AsyncSession, request: Maintenance, **fields) -> Maintenance:
    for key, value in fields.items():
        setattr(request, key, value)
    await db.flush()
    return request


async def delete_request(db: AsyncSession, request: Maintenance) -> None:
    await db.delete(request)
    await db.flush()
