"""Contract management: leases between owners' assets and tenants."""

from .models import Contract, ContractStatus

__all__ = [
    "Contract",
    "ContractStatus",
]
