"""Authentication and user schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from .models import UserRole

# ----- User Schemas -----


class UserAddress(BaseModel):
    """Postal address of a user (Thai format)."""

    house_number: str
    village_number: str | None = None
    street: str | None = None
    sub_district: str
    district: str
    province: str
    postal_code: str


class UserBase(BaseModel):
    """Base user schema."""

    phone: str = Field(..., min_length=10, max_length=20)
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    address: UserAddress | None = None


class UserCreate(UserBase):
    """Schema for creating a user."""

    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole


class UserUpdate(BaseModel):
    """Schema for updating a user. Only provided fields change."""

    phone: str | None = Field(None, min_length=10, max_length=20)
    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6, max_length=128)
    address: UserAddress | None = None


class UserResponse(BaseModel):
    """Schema for user response. Never carries the password hash."""

    id: str
    phone: str
    role: UserRole
    name: str
    email: str | None = None
    avatar: str | None = None
    address: dict | None = None
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ----- Auth Schemas -----


class LoginRequest(BaseModel):
    """Schema for login request."""

    phone: str = Field(..., min_length=10)
    password: str = Field(..., min_length=6)


class TokenResponse(BaseModel):
    """Access token issued on login, with the logged in user."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse


class ForgotPasswordRequest(BaseModel):
    phone: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    """Schema for password change request."""

    current_password: str
    new_password: str = Field(..., min_length=6, max_length=128)


class AuthenticatedUser(BaseModel):
    """Authenticated user context for request handling."""

    id: str
    role: UserRole
    phone: str = ""
    name: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER

    @property
    def is_tenant(self) -> bool:
        return self.role == UserRole.TENANT
