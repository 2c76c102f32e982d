"""Shared pytest configuration and fixtures."""

import os

os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import vehicle_rental.models  # noqa: F401
from vehicle_rental.database import Base, get_db
from vehicle_rental.domain.enums import UserRole
from vehicle_rental.main import app

from tests.helpers import auth_headers, create_user, create_vehicle


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def client(session_factory):
    """HTTP client bound to the app and the per-test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def customer(session_factory):
    return await create_user(
        session_factory, "amina@gia-rental.cm", first_name="Amina", last_name="Nkongho"
    )


@pytest.fixture
async def other_customer(session_factory):
    return await create_user(
        session_factory, "paul@gia-rental.cm", first_name="Paul", last_name="Ekane"
    )


@pytest.fixture
async def admin(session_factory):
    return await create_user(
        session_factory,
        "admin@gia-rental.cm",
        role=UserRole.ADMIN,
        first_name="GIA",
        last_name="Admin",
    )


@pytest.fixture
def customer_headers(customer):
    return auth_headers(customer)


@pytest.fixture
def other_headers(other_customer):
    return auth_headers(other_customer)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
async def vehicle(session_factory):
    return await create_vehicle(session_factory)
