"""Common schemas and utilities shared across modules."""

from .schemas import BaseResponse, CountResponse

__all__ = [
    "BaseResponse",
    "CountResponse",
]
