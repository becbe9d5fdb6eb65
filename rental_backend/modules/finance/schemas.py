"""Financial record schemas."""

import datetime as dt

from pydantic import BaseModel, Field, model_validator

from .models import EXPENSE_CATEGORIES, INCOME_CATEGORIES, FinanceType


def _check_category(finance_type: FinanceType | None, category: str | None) -> None:
    if finance_type is None or category is None:
        return
    allowed = INCOME_CATEGORIES if finance_type == FinanceType.INCOME else EXPENSE_CATEGORIES
    if category not in allowed:
        raise ValueError(
            f"category '{category}' is not valid for {finance_type.value}; "
            f"expected one of {', '.join(sorted(allowed))}"
        )


class FinancialRecordCreate(BaseModel):
    asset_id: str | None = None
    contract_id: str | None = None
    type: FinanceType
    category: str = Field(..., min_length=1, max_length=50)
    amount: float = Field(..., gt=0)
    description: str = ""
    date: dt.date

    @model_validator(mode="after")
    def validate_category(self):
        _check_category(self.type, self.category)
        return self


class FinancialRecordUpdate(BaseModel):
    """Only provided fields change."""

    asset_id: str | None = None
    contract_id: str | None = None
    type: FinanceType | None = None
    category: str | None = Field(None, min_length=1, max_length=50)
    amount: float | None = Field(None, gt=0)
    description: str | None = None
    date: dt.date | None = None


class FinancialRecordResponse(BaseModel):
    id: str
    asset_id: str | None = None
    contract_id: str | None = None
    created_by: str | None = None
    type: FinanceType
    category: str
    amount: float
    description: str
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True


class FinanceSummary(BaseModel):
    """Totals over the filtered records."""

    income: float = 0
    expense: float = 0
    net: float = 0
