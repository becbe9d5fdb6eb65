"""Dashboard and admin summary routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import AdminUser, CurrentUser
from ..commons import BaseResponse
from . import services
from .schemas import AdminSummary, OwnerDashboard, TenantDashboard

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])
admin_router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("", response_model=BaseResponse[OwnerDashboard | TenantDashboard])
async def get_dashboard(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Headline numbers for the current user's role."""
    stats = await services.get_dashboard(db, current_user)
    return BaseResponse(success=True, data=stats)


@admin_router.get("/summary", response_model=BaseResponse[AdminSummary])
async def admin_summary(
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    summary = await services.admin_summary(db)
    return BaseResponse(success=True, data=summary)
