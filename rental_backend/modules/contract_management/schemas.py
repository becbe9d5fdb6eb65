"""Contract schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from .models import ContractStatus


class ContractBase(BaseModel):
    start_date: date
    end_date: date
    rent_amount: float = Field(..., gt=0)
    deposit: float = Field(0, ge=0)
    insurance: float = Field(0, ge=0)
    status: ContractStatus = ContractStatus.PENDING
    documents: list[str] = []
    notes: str | None = None


class ContractCreate(ContractBase):
    asset_id: str
    tenant_id: str

    @model_validator(mode="after")
    def validate_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ContractUpdate(BaseModel):
    """Partial update; dates are re-checked against the stored contract."""

    start_date: date | None = None
    end_date: date | None = None
    rent_amount: float | None = Field(None, gt=0)
    deposit: float | None = Field(None, ge=0)
    insurance: float | None = Field(None, ge=0)
    status: ContractStatus | None = None
    documents: list[str] | None = None
    notes: str | None = None


class ContractResponse(ContractBase):
    id: str
    contract_number: str | None = None
    asset_id: str
    tenant_id: str
    asset_name: str | None = None
    tenant_name: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
