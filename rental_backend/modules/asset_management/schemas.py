"""Asset schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from .models import AssetStatus, AssetType


class DevelopmentHistoryEntry(BaseModel):
    """One step in the development of a parent asset."""

    date: str
    action: str  # land_purchased, construction_started, construction_completed, units_created
    description: str


class AssetBase(BaseModel):
    """Base asset schema."""

    type: AssetType
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    district: str = Field(..., min_length=1, max_length=120)
    amphoe: str = Field(default="", max_length=120)
    province: str = Field(..., min_length=1, max_length=120)
    postal_code: str = Field(..., min_length=5, max_length=10)
    size: float = Field(..., gt=0)
    rooms: int = Field(..., ge=0)
    purchase_price: float = Field(..., gt=0)
    current_value: float = Field(..., gt=0)
    status: AssetStatus = AssetStatus.AVAILABLE
    images: list[str] = Field(default_factory=list)
    documents: list[str] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None
    description: str | None = None
    parent_asset_id: str | None = None
    is_parent: bool = False
    unit_number: str | None = None
    total_units: int | None = None
    development_history: list[DevelopmentHistoryEntry] | None = None


class AssetCreate(AssetBase):
    """Schema for creating an asset.

    ``owner_id`` is only honoured when an admin creates the asset on behalf
    of an owner; owners always own what they create.
    """

    owner_id: str | None = None


class AssetUpdate(BaseModel):
    """Schema for updating an asset. Only provided fields change."""

    type: AssetType | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    address: str | None = Field(None, min_length=1)
    district: str | None = Field(None, min_length=1, max_length=120)
    amphoe: str | None = Field(None, max_length=120)
    province: str | None = Field(None, min_length=1, max_length=120)
    postal_code: str | None = Field(None, min_length=5, max_length=10)
    size: float | None = Field(None, gt=0)
    rooms: int | None = Field(None, ge=0)
    purchase_price: float | None = Field(None, gt=0)
    current_value: float | None = Field(None, gt=0)
    status: AssetStatus | None = None
    images: list[str] | None = None
    documents: list[str] | None = None
    latitude: float | None = None
    longitude: float | None = None
    description: str | None = None
    parent_asset_id: str | None = None
    is_parent: bool | None = None
    unit_number: str | None = None
    total_units: int | None = None
    development_history: list[DevelopmentHistoryEntry] | None = None


class AssetResponse(BaseModel):
    """Schema for asset response."""

    id: str
    owner_id: str
    type: AssetType
    name: str
    address: str
    district: str
    amphoe: str
    province: str
    postal_code: str
    size: float
    rooms: int
    purchase_price: float
    current_value: float
    status: AssetStatus
    images: list[str] = []
    documents: list[str] = []
    latitude: float | None = None
    longitude: float | None = None
    description: str | None = None
    parent_asset_id: str | None = None
    is_parent: bool
    child_assets: list[str] = []
    unit_number: str | None = None
    total_units: int | None = None
    development_history: list[DevelopmentHistoryEntry] | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UnitsCreate(BaseModel):
    """Subdivide a parent asset into rental units."""

    number_of_units: int = Field(..., ge=1, le=100)
    unit_size: float = Field(..., gt=0)
    rooms: int = Field(default=1, ge=0)
    unit_prefix: str = Field(
        default="101", description="First unit number, e.g. 101; non-numeric starts at 1"
    )


class StatusReconcileResult(BaseModel):
    changed: int
    date: str
