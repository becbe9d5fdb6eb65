"""Asset API routes."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.utils import utc_today
from ...database import get_db
from ..auth.dependencies import AdminUser, CurrentUser, OwnerOrAdminUser
from ..commons import BaseResponse
from . import services
from .geocoding import GeocodedAddress, reverse_geocode
from .schemas import (
    AssetCreate,
    AssetResponse,
    AssetUpdate,
    StatusReconcileResult,
    UnitsCreate,
)
from .status_reconciler import reconcile_asset_statuses

router = APIRouter(prefix="/assets", tags=["Assets"])


@router.get("", response_model=BaseResponse[list[AssetResponse]])
async def list_assets(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List assets visible to the current user, newest first."""
    assets = await services.list_assets(db, current_user)
    return BaseResponse(
        success=True, data=[AssetResponse.model_validate(a) for a in assets]
    )


@router.get("/reverse-geocode", response_model=BaseResponse[GeocodedAddress])
async def reverse_geocode_location(
    current_user: CurrentUser,
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
):
    """Resolve map coordinates into Thai address fields."""
    address = await reverse_geocode(lat, lng)
    return BaseResponse(success=True, data=address)


@router.post("/reconcile-status", response_model=BaseResponse[StatusReconcileResult])
async def reconcile_status(
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    on_date: date | None = Query(None, alias="date"),
):
    """Recompute every asset's occupancy status from its contracts."""
    on_date = on_date or utc_today()
    changed = await reconcile_asset_statuses(db, on_date)
    return BaseResponse(
        success=True,
        message=f"Updated {changed} asset(s)",
        data=StatusReconcileResult(changed=changed, date=on_date.isoformat()),
    )


@router.get("/{asset_id}", response_model=BaseResponse[AssetResponse])
async def get_asset(
    asset_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    asset = await services.get_asset(db, current_user, asset_id)
    return BaseResponse(success=True, data=AssetResponse.model_validate(asset))


@router.post(
    "", response_model=BaseResponse[AssetResponse], status_code=status.HTTP_201_CREATED
)
async def create_asset(
    asset_data: AssetCreate,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    asset = await services.create_asset(db, current_user, asset_data)
    return BaseResponse(
        success=True,
        message="Asset created successfully",
        data=AssetResponse.model_validate(asset),
    )


@router.put("/{asset_id}", response_model=BaseResponse[AssetResponse])
async def update_asset(
    asset_id: str,
    asset_data: AssetUpdate,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    asset = await services.update_asset(db, current_user, asset_id, asset_data)
    return BaseResponse(
        success=True,
        message="Asset updated successfully",
        data=AssetResponse.model_validate(asset),
    )


@router.delete("/{asset_id}", response_model=BaseResponse[None])
async def delete_asset(
    asset_id: str,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_asset(db, current_user, asset_id)
    return BaseResponse(success=True, message="Asset deleted successfully")


@router.post(
    "/{asset_id}/units",
    response_model=BaseResponse[list[AssetResponse]],
    status_code=status.HTTP_201_CREATED,
)
async def create_units(
    asset_id: str,
    units_data: UnitsCreate,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Subdivide a parent asset (land) into rental units."""
    units = await services.create_units(db, current_user, asset_id, units_data)
    return BaseResponse(
        success=True,
        message=f"Created {len(units)} unit(s)",
        data=[AssetResponse.model_validate(u) for u in units],
    )
