"""Asset models.

An asset is anything an owner rents out: a house, a condo, an apartment
unit or a plot of land. Land can act as a parent asset that is subdivided
into rental units; the units point back to it through ``parent_asset_id``.
"""

import enum
from decimal import Decimal

from sqlalchemy import JSON, Boolean, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UUID as UUID_DB
from ...core.database_types import StringEnum
from ...database import Base, TimestampMixin, UUIDPrimaryKey


class AssetType(str, enum.Enum):
    HOUSE = "house"
    CONDO = "condo"
    APARTMENT = "apartment"
    LAND = "land"


class AssetStatus(str, enum.Enum):
    """Occupancy status of an asset."""

    AVAILABLE = "available"
    RENTED = "rented"
    MAINTENANCE = "maintenance"


class Asset(UUIDPrimaryKey, TimestampMixin, Base):
    """A rentable property owned by an owner."""

    __tablename__ = "assets"

    owner_id: Mapped[str] = mapped_column(
        UUID_DB(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[AssetType] = mapped_column(StringEnum(AssetType), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    district: Mapped[str] = mapped_column(String(120), nullable=False)
    amphoe: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    province: Mapped[str] = mapped_column(String(120), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(10), nullable=False)
    size: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    purchase_price: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    current_value: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    status: Mapped[AssetStatus] = mapped_column(
        StringEnum(AssetStatus), nullable=False, default=AssetStatus.AVAILABLE
    )
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    documents: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    latitude: Mapped[Decimal | None] = mapped_column(Numeric(10, 8), nullable=True)
    longitude: Mapped[Decimal | None] = mapped_column(Numeric(11, 8), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Subdivision of land into rental units
    parent_asset_id: Mapped[str | None] = mapped_column(
        UUID_DB(), ForeignKey("assets.id", ondelete="SET NULL"), nullable=True
    )
    is_parent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    child_assets: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    unit_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    total_units: Mapped[int | None] = mapped_column(Integer, nullable=True)
    development_history: Mapped[list | None] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        Index("ix_assets_owner", "owner_id"),
        Index("ix_assets_status", "status"),
        Index("ix_assets_parent", "parent_asset_id"),
    )

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, name={self.name}, status={self.status})>"
