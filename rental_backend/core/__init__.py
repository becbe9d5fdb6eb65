"""Core infrastructure for the rental backend."""

from .database_types import UUID
from .exceptions import (
    AuthenticationError,
    BusinessLogicError,
    ExternalServiceError,
    NotFoundError,
    PermissionError,
    RentalException,
    ResourceAlreadyExistsError,
    ValidationError,
)
from .thai_text import baht_text, number_to_thai_words

__all__ = [
    "UUID",
    "RentalException",
    "AuthenticationError",
    "NotFoundError",
    "ResourceAlreadyExistsError",
    "ValidationError",
    "BusinessLogicError",
    "PermissionError",
    "ExternalServiceError",
    "baht_text",
    "number_to_thai_words",
]
