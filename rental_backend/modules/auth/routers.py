"""Authentication and user API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError
from ...database import get_db
from ..commons import BaseResponse
from . import crud, services
from .dependencies import AdminUser, CurrentUser
from .models import UserRole
from .schemas import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
users_router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/login", response_model=BaseResponse[TokenResponse])
async def login(
    login_data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Authenticate with phone and password and return an access token."""
    tokens = await services.authenticate_user(
        db=db, phone=login_data.phone, password=login_data.password
    )

    return BaseResponse(
        success=True,
        message=f"Welcome back, {tokens.user.name}!",
        data=tokens,
    )


@router.post("/forgot-password", response_model=BaseResponse[None])
async def forgot_password(
    request_data: ForgotPasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    message = await services.request_password_reset(db, request_data.phone)
    return BaseResponse(success=True, message=message)


@router.get("/me", response_model=BaseResponse[UserResponse])
async def get_current_user_info(
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Get the current user's profile."""
    user = await crud.get_user_by_id(db, current_user.id)
    if not user:
        raise NotFoundError("User not found")

    return BaseResponse(success=True, data=UserResponse.model_validate(user))


@router.post("/change-password", response_model=BaseResponse[None])
async def change_password(
    current_user: CurrentUser,
    password_data: ChangePasswordRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Change current user's password."""
    await services.change_password(
        db=db,
        user_id=current_user.id,
        current_password=password_data.current_password,
        new_password=password_data.new_password,
    )

    return BaseResponse(success=True, message="Password changed successfully")


# ----- Users -----


@users_router.get("", response_model=BaseResponse[list[UserResponse]])
async def list_users(
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    role: UserRole | None = Query(None, description="Filter by role"),
):
    """List all users (admin only)."""
    users = await crud.list_users(db, role.value if role else None)
    return BaseResponse(
        success=True, data=[UserResponse.model_validate(u) for u in users]
    )


@users_router.get("/{user_id}", response_model=BaseResponse[UserResponse])
async def get_user(
    user_id: str,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await services.get_user(db, current_user, user_id)
    return BaseResponse(success=True, data=UserResponse.model_validate(user))


@users_router.post(
    "",
    response_model=BaseResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    user_data: UserCreate,
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Create a user (admin only)."""
    user = await services.create_user(db, current_user, user_data)
    return BaseResponse(
        success=True,
        message="User created successfully",
        data=UserResponse.model_validate(user),
    )


@users_router.put("/{user_id}", response_model=BaseResponse[UserResponse])
async def update_user(
    user_id: str,
    user_data: UserUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Update a user. Users may update themselves; admins anyone."""
    user = await services.update_user(db, current_user, user_id, user_data)
    return BaseResponse(
        success=True,
        message="User updated successfully",
        data=UserResponse.model_validate(user),
    )


@users_router.delete("/{user_id}", response_model=BaseResponse[None])
async def delete_user(
    user_id: str,
    current_user: AdminUser,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete a user (admin only)."""
    await services.delete_user(db, user_id)
    return BaseResponse(success=True, message="User deleted successfully")
