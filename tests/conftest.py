import os

# Settings are chosen at import time, so select the test profile first
os.environ.setdefault("MODE", "test")

from datetime import date

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool

from main import app as fastapi_app
import db as project_db
from config import settings
from config.database import get_sync_url
from core.security import get_password_hash
from db_base import Base
from db_models import Asset, Category, Department, Employee, Site, User, UserRole

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL") or settings.DATABASE_URL
sync_url = get_sync_url(TEST_DATABASE_URL)

TEST_PASSWORD = "password123"
# bcrypt is slow, so one hash serves every seeded user
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)

# Use an async engine for app interactions
engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=NullPool  # Disable connection pooling for tests
)
AsyncSessionTest = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

sync_engine = create_engine(sync_url, poolclass=NullPool)


def _seed(session: Session) -> dict:
    """
    Seed a small registry: 4 users, 2 sites, 2 categories, 2 departments,
    2 employees and 10 assets FA001..FA010. FA010 has no site, category or
    department.
    """
    users = {
        "admin": User(email="admin@test.com", full_name="Test Admin", role=UserRole.ADMIN.value, is_active=True),
        "operator": User(email="operator@test.com", full_name="Test Operator", role=UserRole.SO_ASSET_USER.value, is_active=True),
        "viewer": User(email="viewer@test.com", full_name="Test Viewer", role=UserRole.VIEWER.value, is_active=True),
        "inactive": User(email="inactive@test.com", full_name="Former Staff", role=UserRole.ADMIN.value, is_active=False),
    }
    for user in users.values():
        user.hashed_password = TEST_PASSWORD_HASH

    head_office = Site(name="Head Office", city="Jakarta", sort_order=1)
    warehouse = Site(name="Warehouse", city="Bekasi", sort_order=2)
    computer = Category(name="Computer", sort_order=1)
    furniture = Category(name="Furniture", sort_order=2)
    it = Department(name="IT", sort_order=1)
    finance = Department(name="Finance", sort_order=2)
    budi = Employee(employee_id="E001", name="Budi Santoso", department="IT", is_active=True)
    siti = Employee(employee_id="E002", name="Siti Rahayu", department="Finance", is_active=True)

    session.add_all([*users.values(), head_office, warehouse, computer, furniture, it, finance, budi, siti])
    session.flush()

    assets = []
    for n in range(1, 11):
        asset = Asset(
            asset_number=f"FA{n:03d}",
            name=f"{'Laptop' if n % 2 else 'Desk'} {n}",
            status="Active",
            brand="Dell" if n % 2 else "Informa",
            serial_no=f"SN-{n:04d}",
            cost=1000.0 * n,
            purchase_date=date(2023, 1, n),
        )
        if n < 10:
            asset.site_id = head_office.id if n <= 6 else warehouse.id
            asset.category_id = computer.id if n % 2 else furniture.id
            asset.department_id = it.id if n <= 5 else finance.id
        if n == 1:
            asset.pic_id = budi.id
        if n == 2:
            asset.pic = "Dewi Lestari"
        assets.append(asset)
    session.add_all(assets)
    session.commit()

    return {
        "users": {key: user.id for key, user in users.items()},
        "sites": {"head_office": head_office.id, "warehouse": warehouse.id},
        "categories": {"computer": computer.id, "furniture": furniture.id},
        "departments": {"it": it.id, "finance": finance.id},
        "employees": {"budi": budi.id, "siti": siti.id},
        "assets": {asset.asset_number: asset.id for asset in assets},
    }


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def seeded():
    """Fresh schema and seed data for every test (destructive - use a dedicated test DB)."""
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    with Session(sync_engine) as session:
        data = _seed(session)
    yield data
    Base.metadata.drop_all(bind=sync_engine)


@pytest.fixture
async def db_session():
    async with AsyncSessionTest() as session:
        yield session


@pytest.fixture
async def async_client():
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with AsyncSessionTest() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


def _headers(user_id: int) -> dict:
    return {"X-User-Id": str(user_id)}


@pytest.fixture
def admin_headers(seeded):
    """Return identification headers for the admin user."""
    return _headers(seeded["users"]["admin"])


@pytest.fixture
def operator_headers(seeded):
    """Return identification headers for the stock opname operator."""
    return _headers(seeded["users"]["operator"])


@pytest.fixture
def viewer_headers(seeded):
    """Return identification headers for the read-only viewer."""
    return _headers(seeded["users"]["viewer"])


@pytest.fixture
def inactive_headers(seeded):
    return _headers(seeded["users"]["inactive"])


@pytest.fixture
def asset_ids(seeded):
    return seeded["assets"]


@pytest.fixture
async def active_session(async_client, admin_headers):
    """An Active stock opname session opened over the seeded registry."""
    resp = await async_client.post(
        "/api/v1/so-sessions",
        json={"name": "SO 2025 Q1", "year": 2025},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
