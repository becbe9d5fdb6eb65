"""Contract API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ..auth.dependencies import CurrentUser, OwnerOrAdminUser
from ..commons import BaseResponse
from . import services
from .models import ContractStatus
from .schemas import ContractCreate, ContractResponse, ContractUpdate

router = APIRouter(prefix="/contracts", tags=["Contracts"])


@router.get("", response_model=BaseResponse[list[ContractResponse]])
async def list_contracts(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    asset_id: str | None = None,
    contract_status: ContractStatus | None = Query(None, alias="status"),
):
    """List contracts visible to the current user, newest first."""
    contracts = await services.list_contracts(
        db, current_user, asset_id=asset_id, status=contract_status
    )
    return BaseResponse(
        success=True, data=[ContractResponse.model_validate(c) for c in contracts]
    )


@router.get("/{contract_id}", response_model=BaseResponse[ContractResponse])
async def get_contract(
    contract_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    contract = await services.get_contract(db, current_user, contract_id)
    return BaseResponse(success=True, data=ContractResponse.model_validate(contract))


@router.post(
    "", response_model=BaseResponse[ContractResponse], status_code=status.HTTP_201_CREATED
)
async def create_contract(
    contract_data: ContractCreate,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a contract and generate its payment schedule."""
    contract = await services.create_contract(db, current_user, contract_data)
    return BaseResponse(
        success=True,
        message="Contract created successfully",
        data=ContractResponse.model_validate(contract),
    )


@router.put("/{contract_id}", response_model=BaseResponse[ContractResponse])
async def update_contract(
    contract_id: str,
    contract_data: ContractUpdate,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    contract = await services.update_contract(db, current_user, contract_id, contract_data)
    return BaseResponse(
        success=True,
        message="Contract updated successfully",
        data=ContractResponse.model_validate(contract),
    )


@router.delete("/{contract_id}", response_model=BaseResponse[None])
async def delete_contract(
    contract_id: str,
    current_user: OwnerOrAdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await services.delete_contract(db, current_user, contract_id)
    return BaseResponse(success=True, message="Contract deleted successfully")
