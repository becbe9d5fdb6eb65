"""Financial record API routes (owners and admins)."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import OwnerOrAdminUser
from ..commons import BaseResponse
from . import services
from .models import FinanceType
from .schemas import (
    FinanceSummary,
    FinancialRecordCreate,
    FinancialRecordResponse,
    FinancialRecordUpdate,
)

router = APIRouter(prefix="/finance", tags=["Finance"])


@router.get("", response_model=BaseResponse[list[FinancialRecordResponse]])
async def list_records(
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    finance_type: FinanceType | None = Query(None, alias="type"),
    asset_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
):
    records = await services.list_records(
        db,
        current_user,
        finance_type=finance_type,
        asset_id=asset_id,
        date_from=date_from,
        date_to=date_to,
    )
    return BaseResponse(
        success=True,
        data=[FinancialRecordResponse.model_validate(r) for r in records],
    )


@router.get("/summary", response_model=BaseResponse[FinanceSummary])
async def finance_summary(
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    asset_id: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
):
    """Income, expense and net over the visible records."""
    summary = await services.summarize(
        db, current_user, asset_id=asset_id, date_from=date_from, date_to=date_to
    )
    return BaseResponse(success=True, data=summary)


@router.get("/{record_id}", response_model=BaseResponse[FinancialRecordResponse])
async def get_record(
    record_id: str,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    record = await services.get_record(db, current_user, record_id)
    return BaseResponse(success=True, data=FinancialRecordResponse.model_validate(record))


@router.post(
    "",
    response_model=BaseResponse[FinancialRecordResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_record(
    record_data: FinancialRecordCreate,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    record = await services.create_record(db, current_user, record_data)
    return BaseResponse(
        success=True,
        message="Financial record created successfully",
        data=FinancialRecordResponse.model_validate(record),
    )


@router.put("/{record_id}", response_model=BaseResponse[FinancialRecordResponse])
async def update_record(
    record_id: str,
    record_data: FinancialRecordUpdate,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    record = await services.update_record(db, current_user, record_id, record_data)
    return BaseResponse(
        success=True,
        message="Financial record updated successfully",
        data=FinancialRecordResponse.model_validate(record),
    )


@router.delete("/{record_id}", response_model=BaseResponse[None])
async def delete_record(
    record_id: str,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_record(db, current_user, record_id)
    return BaseResponse(success=True, message="Financial record deleted successfully")
