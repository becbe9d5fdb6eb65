"""Initial schema for the rental management backend

Revision ID: 0001
Revises:
Create Date: 2024-12-08

Creates all tables for:
- Auth (users)
- Assets (assets, with parent/child units)
- Contracts (contracts)
- Payments (payments)
- Maintenance (maintenance)
- Finance (financial_records)
- Notifications (notifications)
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid(name: str, **kwargs) -> sa.Column:
    return sa.Column(name, sa.String(36), **kwargs)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    """Create all tables."""

    # users - admins, owners and tenants
    op.create_table(
        "users",
        _uuid("id", nullable=False),
        sa.Column("phone", sa.String(20), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("avatar", sa.String(500), nullable=True),
        sa.Column("address", sa.JSON(), nullable=True),
        _uuid("created_by", nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("phone"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_users_role", "users", ["role"])

    # assets - rentable properties, optionally subdivided into units
    op.create_table(
        "assets",
        _uuid("id", nullable=False),
        _uuid("owner_id", nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("district", sa.String(120), nullable=False),
        sa.Column("amphoe", sa.String(120), nullable=False, server_default=""),
        sa.Column("province", sa.String(120), nullable=False),
        sa.Column("postal_code", sa.String(10), nullable=False),
        sa.Column("size", sa.Numeric(12, 2), nullable=False),
        sa.Column("rooms", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("purchase_price", sa.Numeric(15, 2), nullable=False),
        sa.Column("current_value", sa.Numeric(15, 2), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="available"),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("documents", sa.JSON(), nullable=False),
        sa.Column("latitude", sa.Numeric(10, 8), nullable=True),
        sa.Column("longitude", sa.Numeric(11, 8), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        _uuid("parent_asset_id", nullable=True),
        sa.Column("is_parent", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("child_assets", sa.JSON(), nullable=False),
        sa.Column("unit_number", sa.String(50), nullable=True),
        sa.Column("total_units", sa.Integer(), nullable=True),
        sa.Column("development_history", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_asset_id"], ["assets.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_assets_owner", "assets", ["owner_id"])
    op.create_index("ix_assets_status", "assets", ["status"])
    op.create_index("ix_assets_parent", "assets", ["parent_asset_id"])

    # contracts - leases of assets to tenants
    op.create_table(
        "contracts",
        _uuid("id", nullable=False),
        sa.Column("contract_number", sa.String(30), nullable=True),
        _uuid("asset_id", nullable=False),
        _uuid("tenant_id", nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("rent_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("deposit", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("insurance", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
        sa.Column("documents", sa.JSON(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("contract_number"),
        sa.ForeignKeyConstraint(["asset_id"], ["assets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tenant_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_contracts_asset", "contracts", ["asset_id"])
    op.create_index("ix_contracts_tenant", "contracts", ["tenant_id"])
    op.create_index(
        "ix_contracts_status_dates", "contracts", ["status", "start_date", "end_date"]
    )

    # payments - amounts owed under contracts
    op.create_table(
        "payments",
        _uuid("id", nullable=False),
        _uuid("contract_id", nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=False),
        sa.Column("paid_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
        sa.Column("proof_images", sa.JSON(), nullable=False),
        sa.Column("receipt_number", sa.String(50), nullable=True),
        sa.Column("receipt_date", sa.Date(), nullable=True),
        sa.Column("payment_method", sa.String(50), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["contract_id"], ["contracts.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_payments_contract_due", "payments", ["contract_id", "due_date"])
    op.create_index("ix_payments_status_due", "payments", ["status", "due_date"])

    # maintenance - repair and upkeep requests
    op.create_table(
        "maintenance",
        _uuid("id", nullable=False),
        _uuid("asset_id", nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
        _uuid("reported_by", nullable=True),
        sa.Column("scheduled_date", sa.Date(), nullable=True),
        sa.Column("completed_date", sa.Date(), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["asset_id"], ["assets.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reported_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_maintenance_asset", "maintenance", ["asset_id"])
    op.create_index("ix_maintenance_status", "maintenance", ["status"])

    # financial_records - income and expense bookkeeping
    op.create_table(
        "financial_records",
        _uuid("id", nullable=False),
        _uuid("asset_id", nullable=True),
        _uuid("contract_id", nullable=True),
        _uuid("created_by", nullable=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("amount", sa.Numeric(15, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["asset_id"], ["assets.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["contract_id"], ["contracts.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_financial_records_asset", "financial_records", ["asset_id"])
    op.create_index(
        "ix_financial_records_type_date", "financial_records", ["type", "date"]
    )

    # notifications - in-app messages per user
    op.create_table(
        "notifications",
        _uuid("id", nullable=False),
        _uuid("user_id", nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        _uuid("related_id", nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="unread"),
        sa.Column("read_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_notifications_user_status", "notifications", ["user_id", "status"])
    op.create_index("ix_notifications_related", "notifications", ["related_id", "type"])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    op.drop_table("notifications")
    op.drop_table("financial_records")
    op.drop_table("maintenance")
    op.drop_table("payments")
    op.drop_table("contracts")
    op.drop_table("assets")
    op.drop_table("users")
