"""Maintenance request schemas."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .models import MaintenanceStatus, MaintenanceType


class MaintenanceCreate(BaseModel):
    asset_id: str
    type: MaintenanceType
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    cost: float = Field(0, ge=0)
    images: list[str] = []


class MaintenanceUpdate(BaseModel):
    status: MaintenanceStatus | None = None
    cost: float | None = Field(None, ge=0)
    scheduled_date: date | None = None
    completed_date: date | None = None
    images: list[str] | None = None


class MaintenanceResponse(BaseModel):
    id: str
    asset_id: str
    type: MaintenanceType
    title: str
    description: str
    cost: float
    status: MaintenanceStatus
    reported_by: str | None = None
    scheduled_date: date | None = None
    completed_date: date | None = None
    images: list[str] = []
    asset_name: str | None = None
    reported_by_name: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
