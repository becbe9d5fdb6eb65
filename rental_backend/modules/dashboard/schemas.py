"""Dashboard schemas."""

from pydantic import BaseModel


class AssetsByStatus(BaseModel):
    available: int = 0
    rented: int = 0
    maintenance: int = 0


class OwnerDashboard(BaseModel):
    """Portfolio overview for owners (own assets) and admins (everything)."""

    total_assets: int = 0
    assets_by_status: AssetsByStatus = AssetsByStatus()
    total_contracts: int = 0
    monthly_income: float = 0
    pending_maintenance: int = 0
    paid_count: int = 0
    overdue_count: int = 0


class TenantDashboard(BaseModel):
    total_contracts: int = 0
    pending_payments: int = 0
    overdue_payments: int = 0
    pending_maintenance: int = 0


class AdminSummary(BaseModel):
    total_owners: int = 0
    total_tenants: int = 0
    total_assets: int = 0
    contracts_by_status: dict[str, int] = {}
