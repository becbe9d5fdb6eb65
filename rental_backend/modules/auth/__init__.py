"""Authentication and user management."""

from .dependencies import (
    AdminUser,
    CurrentUser,
    OwnerOrAdminUser,
    get_current_user,
    require_role,
)
from .models import User, UserRole
from .schemas import AuthenticatedUser

__all__ = [
    "User",
    "UserRole",
    "get_current_user",
    "require_role",
    "CurrentUser",
    "AdminUser",
    "OwnerOrAdminUser",
    "AuthenticatedUser",
]
