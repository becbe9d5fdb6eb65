"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .jwt_service import decode_access_token
from .models import UserRole
from .schemas import AuthenticatedUser

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthenticatedUser:
    """Extract and validate current user from JWT token.

    All user info is in the token, no database call is made.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return AuthenticatedUser(
            id=payload["sub"],
            role=payload["role"],
            phone=payload.get("phone", ""),
            name=payload.get("name", ""),
        )
    except (KeyError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token payload: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_role(*allowed_roles: str | UserRole):
    """Dependency factory for role-based access control.

    Usage:
        @router.delete("/{user_id}")
        async def delete_user(
            current_user: AuthenticatedUser = Depends(require_role(UserRole.ADMIN))
        ):
            ...
    """
    role_values = {r.value if isinstance(r, UserRole) else r for r in allowed_roles}

    async def role_checker(
        current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    ) -> AuthenticatedUser:
        if current_user.role.value not in role_values:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {', '.join(sorted(role_values))}",
            )
        return current_user

    return role_checker


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
AdminUser = Annotated[AuthenticatedUser, Depends(require_role(UserRole.ADMIN))]
OwnerOrAdminUser = Annotated[
    AuthenticatedUser, Depends(require_role(UserRole.ADMIN, UserRole.OWNER))
]
