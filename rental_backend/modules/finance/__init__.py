"""Financial records: income and expense bookkeeping per asset."""

from .models import FinanceType, FinancialRecord

__all__ = ["FinanceType", "FinancialRecord"]
