"""
OrderHub — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (service unit tests)
    ├── database: Creates every table in a throwaway SQLite file, drops after
    ├── test_client: HTTPX AsyncClient wired to the app (uses `database`)
    ├── customer / other_customer / seller: Registered users with a JWT
    └── delivery: A delivery owned by `customer`, created by `seller`
"""

import os
import tempfile
from dataclasses import dataclass
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any orderhub imports
_db_dir = tempfile.mkdtemp(prefix="orderhub_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["BCRYPT_ROUNDS"] = "4"  # Fastest allowed cost
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["PROD_SERVER_URL"] = ""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from orderhub.database import Base, engine
import orderhub.models  # noqa: F401


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_login(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
            result = await session_service.create_session(mock_db_session, payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database():
    """Fresh schema for every test; nothing leaks between tests."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    raise_app_exceptions=False: unhandled errors come back as the 500
    response the API sends instead of propagating into the test.
    """
    from orderhub.main import app
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Registered users and data
# ══════════════════════════════════════════════════════════════════════════

@dataclass
class RegisteredUser:
    id: str
    name: str
    email: str
    role: str
    token: str

    @property
    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


async def register(client: AsyncClient, name: str, email: str, role: str = "customer") -> RegisteredUser:
    """Sign up through POST /users, then log in through POST /sessions."""
    password = "senha123"
    created = await client.post(
        "/users", json={"name": name, "email": email, "password": password, "role": role}
    )
    assert created.status_code == 201, created.text
    login = await client.post("/sessions", json={"email": email, "password": password})
    assert login.status_code == 201, login.text
    user = created.json()["newUser"]
    return RegisteredUser(
        id=user["id"], name=name, email=email, role=role, token=login.json()["token"]
    )


@pytest_asyncio.fixture
async def customer(test_client) -> RegisteredUser:
    return await register(test_client, "João Silva", "joao@example.com")


@pytest_asyncio.fixture
async def other_customer(test_client) -> RegisteredUser:
    return await register(test_client, "Ana Costa", "ana@example.com")


@pytest_asyncio.fixture
async def seller(test_client) -> RegisteredUser:
    return await register(test_client, "Maria Santos", "maria@example.com", role="sale")


@pytest_asyncio.fixture
async def delivery(test_client, seller, customer) -> Dict[str, Any]:
    response = await test_client.post(
        "/deliveries",
        json={"user_id": customer.id, "description": "Entrega de produtos eletrônicos"},
        headers=seller.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()
