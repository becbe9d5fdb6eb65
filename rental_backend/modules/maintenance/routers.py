"""Maintenance API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser, OwnerOrAdminUser
from ..commons import BaseResponse
from . import services
from .models import MaintenanceStatus
from .schemas import MaintenanceCreate, MaintenanceResponse, MaintenanceUpdate

router = APIRouter(prefix="/maintenance", tags=["Maintenance"])


@router.get("", response_model=BaseResponse[list[MaintenanceResponse]])
async def list_requests(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    asset_id: str | None = None,
    request_status: MaintenanceStatus | None = Query(None, alias="status"),
):
    requests = await services.list_requests(
        db, current_user, asset_id=asset_id, status=request_status
    )
    return BaseResponse(
        success=True, data=[MaintenanceResponse.model_validate(r) for r in requests]
    )


@router.get("/{request_id}", response_model=BaseResponse[MaintenanceResponse])
async def get_request(
    request_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    request = await services.get_request(db, current_user, request_id)
    return BaseResponse(success=True, data=MaintenanceResponse.model_validate(request))


@router.post(
    "",
    response_model=BaseResponse[MaintenanceResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_request(
    request_data: MaintenanceCreate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Report a maintenance need on an asset."""
    request = await services.create_request(db, current_user, request_data)
    return BaseResponse(
        success=True,
        message="Maintenance request created successfully",
        data=MaintenanceResponse.model_validate(request),
    )


@router.put("/{request_id}", response_model=BaseResponse[MaintenanceResponse])
async def update_request(
    request_id: str,
    request_data: MaintenanceUpdate,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    request = await services.update_request(db, current_user, request_id, request_data)
    return BaseResponse(
        success=True,
        message="Maintenance request updated successfully",
        data=MaintenanceResponse.model_validate(request),
    )


@router.delete("/{request_id}", response_model=BaseResponse[None])
async def delete_request(
    request_id: str,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_request(db, current_user, request_id)
    return BaseResponse(success=True, message="Maintenance request deleted successfully")
