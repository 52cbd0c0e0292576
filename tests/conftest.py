"""Pytest configuration and fixtures for ChronoSync tests.

Database tests run against an in-memory SQLite database (aiosqlite), one
fresh schema per test. The application's get_db dependency is overridden
so HTTP requests and direct service calls share the same session.
"""

import os
from collections.abc import AsyncGenerator
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app modules
os.environ["JWT_SECRET_KEY"] = "test-secret-key-" + "0" * 32
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_EXPIRATION_HOURS"] = "24"

TEST_USERNAME = "jdoe"
TEST_PASSWORD = "secret"

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# --- Login Rate Limiter Reset ---


def _reset_login_rate_limiter() -> None:
    """Clear failed login attempts recorded by earlier tests."""
    from chronosync.api.auth import _login_attempts

    _login_attempts.clear()


@pytest.fixture(autouse=True)
def reset_login_rate_limiter():
    _reset_login_rate_limiter()
    yield
    _reset_login_rate_limiter()


# --- Database Fixtures ---


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite engine with all tables."""
    from chronosync.core.database import enable_sqlite_foreign_keys
    from chronosync.models import BaseModel

    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database override."""
    from chronosync.core.database import get_db
    from chronosync.main import app

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# --- Test Factories ---


@pytest.fixture
def firm_factory(db_session):
    """Factory for creating test Firm objects."""
    from chronosync.models import Firm

    async def _create_firm(name: str = "Acme Dental") -> Firm:
        firm = Firm(name=name)
        db_session.add(firm)
        await db_session.flush()
        return firm

    return _create_firm


@pytest.fixture
def user_factory(db_session):
    """Factory for creating test users with hashed passwords."""
    from chronosync.core.roles import UserRole
    from chronosync.models import User
    from chronosync.services.passwords import hash_password

    async def _create_user(
        username: str = TEST_USERNAME,
        password: str = TEST_PASSWORD,
        role: UserRole = UserRole.EMPLOYEE,
        is_enabled: bool = True,
        is_locked: bool = False,
        firm_id: UUID | None = None,
        **kwargs,
    ) -> User:
        user = User(
            username=username,
            password_hash=hash_password(password),
            role=role,
            is_enabled=is_enabled,
            is_locked=is_locked,
            firm_id=firm_id,
            **kwargs,
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _create_user


@pytest_asyncio.fixture
async def employee(user_factory):
    """An enabled employee with the default test credentials."""
    return await user_factory()


@pytest.fixture
def login(async_client):
    """Log in through the API and return the bearer token."""

    async def _login(username: str = TEST_USERNAME, password: str = TEST_PASSWORD) -> str:
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": password},
        )
        assert response.status_code == 200, response.text
        return response.json()["jwtString"]

    return _login


def bearer(token: str) -> dict[str, str]:
    """Authorization header for ``token``."""
    return {"Authorization": f"Bearer {token}"}


# --- Pytest Hooks for Auto-Marking ---


def pytest_collection_modifyitems(config, items):
    """Mark tests as 'integration' when they use database fixtures, else 'unit'."""
    integration_fixtures = {"db_session", "db_engine", "async_client"}

    for item in items:
        if any(mark.name in ("unit", "integration") for mark in item.iter_markers()):
            continue

        if hasattr(item, "fixturenames") and integration_fixtures & set(item.fixturenames):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
