"""CRUD operations for users."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import User, UserRole
from .password_service import hash_password


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_phone(db: AsyncSession, phone: str) -> User | None:
    result = await db.execute(select(User).where(User.phone == phone))
    return result.scalar_one_or_none()


async def phone_taken(
    db: AsyncSession, phone: str, exclude_user_id: str | None = None
) -> bool:
    """Check whether another user already uses this phone number."""
    query = select(User.id).where(User.phone == phone)
    if exclude_user_id:
        query = query.where(User.id != exclude_user_id)
    result = await db.execute(query.limit(1))
    return result.scalar_one_or_none() is not None


async def list_users(db: AsyncSession, role: str | None = None) -> list[User]:
    """List users, newest first, optionally filtered by role."""
    query = select(User)
    if role:
        query = query.where(User.role == role)
    result = await db.execute(query.order_by(User.created_at.desc()))
    return list(result.scalars().all())


async def count_users_by_role(db: AsyncSession) -> dict[str, int]:
    result = await db.execute(select(User.role, func.count()).group_by(User.role))
    return {role: count for role, count in result.all()}


async def create_user(
    db: AsyncSession,
    phone: str,
    password: str,
    role: UserRole | str,
    name: str,
    email: str | None = None,
    address: dict | None = None,
    created_by: str | None = None,
) -> User:
    """Create a new user with a hashed password."""
    user = User(
        phone=phone,
        password_hash=hash_password(password),
        role=role,
        name=name,
        email=email,
        address=address,
        created_by=created_by,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def update_user(db: AsyncSession, user: User, **fields) -> User:
    """Apply the given fields; a ``password`` field is hashed first."""
    password = fields.pop("password", None)
    if password:
        user.password_hash = hash_password(password)
    for key, value in fields.items():
        setattr(user, key, value)
    await db.flush()
    await db.refresh(user)
    return user


async def update_user_password(db: AsyncSession, user: User, new_password: str) -> None:
    user.password_hash = hash_password(new_password)
    await db.flush()


async def delete_user(db: AsyncSession, user: User) -> None:
    await db.delete(user)
    await db.flush()
