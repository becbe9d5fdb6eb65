"""Logging infrastructure for the rental backend."""

from .logger_config import get_logger, setup_logging, shutdown_logging
from .middleware import (
    RequestIdMiddleware,
    TransactionIdFilter,
    get_transaction_id,
    set_transaction_id,
)
from .structured_logger import StructuredFormatter

__all__ = [
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "RequestIdMiddleware",
    "StructuredFormatter",
    "TransactionIdFilter",
    "get_transaction_id",
    "set_transaction_id",
]
