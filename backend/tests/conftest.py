"""Pytest configuration and fixtures for FastCFS tests.

Every test gets a fresh in-memory SQLite database (aiosqlite) and an
httpx client bound to the app with get_db overridden.  Redis is never
contacted: rate limiting is switched off and token revocation checks are
patched.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, patch  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import fastcfs.models  # noqa: E402,F401
from fastcfs.auth.jwt import create_access_token  # noqa: E402
from fastcfs.auth.password import hash_password  # noqa: E402
from fastcfs.auth.revocation import TokenRevocation  # noqa: E402
from fastcfs.database import Base, get_db  # noqa: E402
from fastcfs.main import app  # noqa: E402
from fastcfs.models.user import User, UserRole  # noqa: E402
from fastcfs.schemas.cargo import CargoCreate  # noqa: E402
from fastcfs.services import cargo as cargo_service  # noqa: E402

ADMIN_PASSWORD = "adminpassword123"


# ── Test Database Setup ──────────────────────────────────────────

@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Session shared by the test body and the app under test."""
    session_factory = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """Test client with the database dependency pointed at db_session."""

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ── Redis ────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def no_token_revocation():
    """Token revocation lookups answer 'not revoked' without Redis."""
    with patch.object(
        TokenRevocation, "is_revoked", AsyncMock(return_value=False)
    ), patch.object(
        TokenRevocation, "is_user_revoked", AsyncMock(return_value=False)
    ), patch.object(
        TokenRevocation, "revoke_token", AsyncMock(return_value=True)
    ) as revoke_token:
        yield revoke_token


# ── Test Data Fixtures ───────────────────────────────────────────

@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    user = User(
        username="admin",
        hashed_password=hash_password(ADMIN_PASSWORD),
        role=UserRole.ADMIN.value,
        is_active=True,
    )
    db_session.add(user)
    # Committed so a rolled-back request in the test leaves the user in place
    await db_session.commit()
    return user


@pytest.fixture
def admin_token(admin_user: User) -> str:
    return create_access_token(user_id=admin_user.id, role=admin_user.role)


@pytest.fixture
def auth_headers(admin_token: str) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def cargo_payload() -> dict:
    return {
        "customer_name": "Acme Ltd",
        "customer_phone": "+971500000000",
        "sales_rep_name": "Jane",
        "cargo_description": "<p>10 boxes</p>",
        "origin": "DXB",
        "destination": "LHR",
    }


@pytest_asyncio.fixture
async def cargo(db_session: AsyncSession, cargo_payload: dict):
    """A committed cargo record with status=received."""
    record = await cargo_service.create_cargo(db_session, CargoCreate(**cargo_payload))
    await db_session.commit()
    return record


# ── Test Markers ─────────────────────────────────────────────────

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "api: HTTP endpoint tests")
    config.addinivalue_line("markers", "auth: Authentication tests")
