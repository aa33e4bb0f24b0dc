"""Shared test fixtures."""

import asyncio
import os
import tempfile

# Settings are read at import time; point them at a throwaway database first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "expense_tracker_bootstrap.db")
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.database import Base, get_async_session
from app.main import app
from app.models.user import User

TEST_PASSWORD = "Passw0rd@1"


@pytest.fixture(scope="function")
def session_factory(tmp_path):
    """Create a fresh SQLite database file for each test."""
    # NullPool: every session opens its own connection on whichever event loop uses it
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
        poolclass=NullPool,
    )

    async def create_all():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    asyncio.run(create_all())
    factory = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)

    try:
        yield factory
    finally:
        asyncio.run(engine.dispose())


@pytest.fixture(scope="function")
def client(session_factory):
    """Create a test client with database override."""
    async def override_get_async_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Factory registering a user; returns the parsed AuthResponse."""
    def _register(email, name="Test User", password=TEST_PASSWORD):
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password, "confirmPassword": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_a(register):
    """a@x.com, registered with the six default categories."""
    auth = register("a@x.com", name="Alice")
    return {"auth": auth, "user_id": auth["user"]["userId"], "headers": bearer(auth["token"])}


@pytest.fixture
def user_b(register):
    auth = register("b@x.com", name="Bob")
    return {"auth": auth, "user_id": auth["user"]["userId"], "headers": bearer(auth["token"])}


@pytest.fixture
def admin(register, session_factory):
    """A registered user promoted to the ADMIN role directly in the database."""
    auth = register("root@x.com", name="Root Admin")

    async def promote():
        async with session_factory() as session:
            await session.execute(
                update(User).where(User.user_id == auth["user"]["userId"]).values(role="ADMIN")
            )
            await session.commit()

    asyncio.run(promote())
    return {"auth": auth, "user_id": auth["user"]["userId"], "headers": bearer(auth["token"])}


@pytest.fixture
def make_expense(client):
    """Factory posting an expense for the given headers; returns the created JSON."""
    def _make(headers, amount="50.25", category="Food", **extra):
        payload = {
            "amount": amount,
            "category": category,
            "date": extra.pop("date", "2024-03-10"),
            "time": extra.pop("time", "12:30:00"),
        }
        payload.update(extra)
        response = client.post("/api/expenses", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
