"""Common utilities for the rental backend."""

from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Get the current calendar date in UTC."""
    return utc_now().date()


def to_decimal(value) -> Decimal:
    """Coerce a numeric-looking value to Decimal, treating garbage as zero."""
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        result = Decimal(str(value).replace(",", "").strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def format_amount(value) -> str:
    """Format an amount with thousands separators, e.g. 25000 -> '25,000'."""
    amount = to_decimal(value).quantize(Decimal("0.01"))
    if amount == amount.to_integral_value():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"
