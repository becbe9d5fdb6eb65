"""Shared fixtures: a throwaway SQLite database, an HTTP client and users."""

import os
from datetime import date
from decimal import Decimal
from pathlib import Path

os.environ.setdefault("CONFIG", str(Path(__file__).parent / "resources" / "test.yaml"))

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rental_backend.database import Base, get_db, import_models  # noqa: E402
from rental_backend.main import app  # noqa: E402
from rental_backend.modules.asset_management.models import (  # noqa: E402
    Asset,
    AssetStatus,
    AssetType,
)
from rental_backend.modules.auth import crud as user_crud  # noqa: E402
from rental_backend.modules.auth.jwt_service import create_access_token  # noqa: E402
from rental_backend.modules.auth.models import UserRole  # noqa: E402
from rental_backend.modules.contract_management.models import (  # noqa: E402
    Contract,
    ContractStatus,
)
from rental_backend.modules.payment_management.models import (  # noqa: E402
    Payment,
    PaymentStatus,
    PaymentType,
)

import_models()

PASSWORD = "secret123"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'rental.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(user) -> dict:
    token = create_access_token(
        user_id=user.id,
        role=UserRole(user.role).value,
        phone=user.phone,
        name=user.name,
    )
    return {"Authorization": f"Bearer {token}"}


async def _create_user(db, phone: str, role: UserRole, name: str):
    user = await user_crud.create_user(
        db, phone=phone, password=PASSWORD, role=role, name=name
    )
    await db.commit()
    return user


@pytest.fixture
async def admin(db):
    return await _create_user(db, "0800000001", UserRole.ADMIN, "ผู้ดูแลระบบ")


@pytest.fixture
async def owner(db):
    return await _create_user(db, "0811111111", UserRole.OWNER, "สมชาย ใจดี")


@pytest.fixture
async def other_owner(db):
    return await _create_user(db, "0822222222", UserRole.OWNER, "สมหญิง รักดี")


@pytest.fixture
async def tenant(db):
    return await _create_user(db, "0833333333", UserRole.TENANT, "วิชัย เช่าบ้าน")


async def make_asset(db, owner_id: str, **overrides) -> Asset:
    fields = {
        "owner_id": owner_id,
        "type": AssetType.CONDO,
        "name": "คอนโดริมน้ำ",
        "address": "99/1 ถนนเจริญกรุง",
        "district": "บางรัก",
        "amphoe": "บางรัก",
        "province": "กรุงเทพมหานคร",
        "postal_code": "10500",
        "size": Decimal("35"),
        "rooms": 1,
        "purchase_price": Decimal("2500000"),
        "current_value": Decimal("2800000"),
        "status": AssetStatus.AVAILABLE,
        "images": [],
        "documents": [],
        "child_assets": [],
    }
    fields.update(overrides)
    asset = Asset(**fields)
    db.add(asset)
    await db.commit()
    await db.refresh(asset)
    return asset


async def make_contract(
    db,
    asset_id: str,
    tenant_id: str,
    start_date: date,
    end_date: date,
    status: ContractStatus = ContractStatus.ACTIVE,
    **overrides,
) -> Contract:
    fields = {
        "asset_id": asset_id,
        "tenant_id": tenant_id,
        "start_date": start_date,
        "end_date": end_date,
        "rent_amount": Decimal("8000"),
        "deposit": Decimal("8000"),
        "insurance": Decimal("16000"),
        "status": status,
        "documents": [],
    }
    fields.update(overrides)
    contract = Contract(**fields)
    db.add(contract)
    await db.commit()
    await db.refresh(contract)
    return contract


@pytest.fixture
async def asset(db, owner):
    return await make_asset(db, owner.id)


async def make_payment(
    db,
    contract_id: str,
    due_date: date,
    amount="8000",
    payment_type: PaymentType = PaymentType.RENT,
    status: PaymentStatus = PaymentStatus.PENDING,
    **overrides,
) -> Payment:
    fields = {
        "contract_id": contract_id,
        "amount": Decimal(str(amount)),
        "type": payment_type,
        "due_date": due_date,
        "status": status,
        "proof_images": [],
    }
    fields.update(overrides)
    payment = Payment(**fields)
    db.add(payment)
    await db.commit()
    await db.refresh(payment)
    return payment


@pytest.fixture
async def contract(db, tenant, asset):
    return await make_contract(db, asset.id, tenant.id, date(2024, 1, 1), date(2024, 12, 31))
