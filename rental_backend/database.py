"""
Database configuration for the rental management backend.

Every entity uses a string UUID primary key and created/updated timestamps.
"""

import logging
import uuid
from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Mapped, declarative_base, mapped_column
from sqlalchemy.sql import func

from .config import settings
from .core.database_types import UUID as UUID_DB

logger = logging.getLogger(__name__)

engine_options = {"echo": settings.database_echo, "future": True}
if not settings.database_url.startswith("sqlite"):
    engine_options.update(pool_pre_ping=True, pool_recycle=3600)

engine = create_async_engine(settings.database_url, **engine_options)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

# Base class
Base = declarative_base()


def generate_uuid() -> str:
    """Generate a new string UUID for primary keys."""
    return str(uuid.uuid4())


class UUIDPrimaryKey:
    """Mixin adding a UUID primary key generated on the client side."""

    id: Mapped[str] = mapped_column(UUID_DB(), primary_key=True, default=generate_uuid)


class TimestampMixin:
    """Mixin to add created and updated timestamps to models."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


async def get_db() -> AsyncSession:
    """Dependency to get database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


def import_models() -> None:
    """Register every module's models on Base.metadata."""
    from .modules.asset_management import models as asset_models  # noqa: F401
    from .modules.auth import models as auth_models  # noqa: F401
    from .modules.contract_management import models as contract_models  # noqa: F401
    from .modules.finance import models as finance_models  # noqa: F401
    from .modules.maintenance import models as maintenance_models  # noqa: F401
    from .modules.notifications import models as notification_models  # noqa: F401
    from .modules.payment_management import models as payment_models  # noqa: F401


async def init_db():
    """Initialize database tables."""
    import_models()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")
