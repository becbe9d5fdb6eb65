"""Dashboard aggregates, scoped by role."""

from sqlalchemy.ext.asyncio import AsyncSession

from ..asset_management import crud as asset_crud
from ..auth import crud as user_crud
from ..auth.models import UserRole
from ..auth.schemas import AuthenticatedUser
from ..contract_management import crud as contract_crud
from ..contract_management.models import ContractStatus
from ..maintenance import crud as maintenance_crud
from ..payment_management import crud as payment_crud
from ..payment_management.models import PaymentStatus
from .schemas import AdminSummary, AssetsByStatus, OwnerDashboard, TenantDashboard


async def owner_dashboard(
    db: AsyncSession, current_user: AuthenticatedUser
) -> OwnerDashboard:
    owner_id = None if current_user.is_admin else current_user.id

    assets = await asset_crud.count_assets_by_status(db, owner_id=owner_id)
    contracts = await contract_crud.count_by_status(db, owner_id=owner_id)
    payments = await payment_crud.count_by_status(db, owner_id=owner_id)

    return OwnerDashboard(
        total_assets=sum(assets.values()),
        assets_by_status=AssetsByStatus(
            **{status.value: count for status, count in assets.items()}
        ),
        total_contracts=sum(contracts.values()),
        monthly_income=await contract_crud.active_rent_total(db, owner_id=owner_id),
        pending_maintenance=await maintenance_crud.count_open(db, owner_id=owner_id),
        paid_count=payments.get(PaymentStatus.PAID, 0),
        overdue_count=payments.get(PaymentStatus.OVERDUE, 0),
    )


async def tenant_dashboard(
    db: AsyncSession, current_user: AuthenticatedUser
) -> TenantDashboard:
    contracts = await contract_crud.count_by_status(db, tenant_id=current_user.id)
    payments = await payment_crud.count_by_status(db, tenant_id=current_user.id)
    return TenantDashboard(
        total_contracts=contracts.get(ContractStatus.ACTIVE, 0),
        pending_payments=payments.get(PaymentStatus.PENDING, 0),
        overdue_payments=payments.get(PaymentStatus.OVERDUE, 0),
        pending_maintenance=await maintenance_crud.count_open(
            db, reported_by=current_user.id
        ),
    )


async def get_dashboard(
    db: AsyncSession, current_user: AuthenticatedUser
) -> OwnerDashboard | TenantDashboard:
    if current_user.is_tenant:
        return await tenant_dashboard(db, current_user)
    return await owner_dashboard(db, current_user)


async def admin_summary(db: AsyncSession) -> AdminSummary:
    users = await user_crud.count_users_by_role(db)
    contracts = await contract_crud.count_by_status(db)
    return AdminSummary(
        total_owners=users.get(UserRole.OWNER, 0),
        total_tenants=users.get(UserRole.TENANT, 0),
        total_assets=await asset_crud.count_assets(db),
        contracts_by_status={
            status.value: contracts.get(status, 0) for status in ContractStatus
        },
    )
