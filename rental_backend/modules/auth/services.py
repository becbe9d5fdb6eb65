"""Authentication and user management business logic."""

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import (
    AuthenticationError,
    NotFoundError,
    PermissionError,
    ResourceAlreadyExistsError,
    ValidationError,
)
from ...core.logging import get_logger
from . import crud
from .jwt_service import create_access_token, get_token_expiry_seconds
from .models import User, UserRole
from .password_service import verify_password
from .schemas import (
    AuthenticatedUser,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

logger = get_logger("auth")


async def authenticate_user(
    db: AsyncSession, phone: str, password: str
) -> TokenResponse:
    """Authenticate by phone and password and issue an access token.

    Raises:
        AuthenticationError: Unknown phone or wrong password (same message
            for both)
    """
    user = await crud.get_user_by_phone(db, phone)
    if not user or not verify_password(password, user.password_hash):
        logger.info("Login failed", extra={"phone": phone})
        raise AuthenticationError("Invalid credentials")

    access_token = create_access_token(
        user_id=user.id,
        role=UserRole(user.role).value,
        phone=user.phone,
        name=user.name,
    )
    logger.info("User logged in", extra={"user_id": user.id, "role": user.role})

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=get_token_expiry_seconds(),
        user=UserResponse.model_validate(user),
    )


async def request_password_reset(db: AsyncSession, phone: str) -> str:
    """Start a password reset.

    The returned message never reveals whether the phone number exists.
    Delivery of the reset link is not wired to any channel yet, the request
    is only logged.
    """
    user = await crud.get_user_by_phone(db, phone)
    if user:
        logger.info("Password reset requested", extra={"user_id": user.id})
    return "If the phone number exists, a reset link will be sent"


async def change_password(
    db: AsyncSession, user_id: str, current_password: str, new_password: str
) -> None:
    """Change a user's own password after verifying the current one."""
    user = await crud.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    if not verify_password(current_password, user.password_hash):
        raise ValidationError("Current password is incorrect")

    await crud.update_user_password(db, user, new_password)
    await db.commit()
    logger.info("Password changed", extra={"user_id": user_id})


def _ensure_self_or_admin(current_user: AuthenticatedUser, user_id: str, action: str):
    if not current_user.is_admin and current_user.id != user_id:
        raise PermissionError(action, "user")


async def get_user(
    db: AsyncSession, current_user: AuthenticatedUser, user_id: str
) -> User:
    """Users can view their own profile; admins can view anyone."""
    _ensure_self_or_admin(current_user, user_id, "view")
    user = await crud.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


async def create_user(
    db: AsyncSession, current_user: AuthenticatedUser, data: UserCreate
) -> User:
    """Create a user on behalf of an admin."""
    if await crud.phone_taken(db, data.phone):
        raise ResourceAlreadyExistsError("User", data.phone)

    user = await crud.create_user(
        db,
        phone=data.phone,
        password=data.password,
        role=data.role,
        name=data.name,
        email=data.email,
        address=data.address.model_dump() if data.address else None,
        created_by=current_user.id,
    )
    await db.commit()
    logger.info(
        "User created",
        extra={"user_id": user.id, "role": user.role, "created_by": current_user.id},
    )
    return user


async def update_user(
    db: AsyncSession, current_user: AuthenticatedUser, user_id: str, data: UserUpdate
) -> User:
    """Update a profile. Phone uniqueness is re-checked when it changes."""
    _ensure_self_or_admin(current_user, user_id, "update")

    fields = data.model_dump(exclude_unset=True)
    if not fields:
        raise ValidationError("No fields to update")
    if "address" in fields and data.address is not None:
        fields["address"] = data.address.model_dump()

    user = await crud.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    if data.phone and await crud.phone_taken(db, data.phone, exclude_user_id=user_id):
        raise ResourceAlreadyExistsError("User", data.phone)

    user = await crud.update_user(db, user, **fields)
    await db.commit()
    return user


async def delete_user(db: AsyncSession, user_id: str) -> None:
    user = await crud.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    await crud.delete_user(db, user)
    await db.commit()
    logger.info("User deleted", extra={"user_id": user_id})
