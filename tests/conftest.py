"""Test fixtures: a fresh in-memory database per test.

Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own aiosqlite in-memory engine. StaticPool keeps a
   single connection alive so every session sees the same database.
2. Tables are created from the ORM metadata, so no migrations are needed.
3. get_db is overridden with a session factory bound to that engine: each
   request gets its own session, exactly like production.

Environment is set before the app is imported because settings are read
once at import time.
"""

import os

os.environ.setdefault("ASSETDESK_ENVIRONMENT", "test")
os.environ.setdefault("ASSETDESK_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ASSETDESK_BCRYPT_ROUNDS", "4")
os.environ.setdefault("ASSETDESK_CREATE_TABLES", "false")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from assetdesk.db.engine import create_tables, get_db  # noqa: E402
from assetdesk.main import app  # noqa: E402

API = "/api/1.0"
PASSWORD = "P4ssword"


@pytest_asyncio.fixture()
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """Direct session for asserting on rows behind the API's back."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(session_factory):
    """HTTP client with get_db pointed at the per-test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def _register(client, suffix: str = "") -> dict:
    body = {
        "username": f"admin{suffix}",
        "email": f"admin{suffix}@acme.test",
        "password": PASSWORD,
        "companyName": f"Acme{suffix}",
    }
    r = await client.post(f"{API}/companies", json=body)
    assert r.status_code == 200, r.text
    data = r.json()
    data["headers"] = bearer(data["token"])
    data["email"] = body["email"]
    return data


@pytest_asyncio.fixture()
async def company(client):
    """A registered company: {companyId, userId, token, headers, email}."""
    return await _register(client)


@pytest_asyncio.fixture()
async def other_company(client):
    return await _register(client, "2")


@pytest_asyncio.fixture()
async def make_user(client, company):
    """Factory: add a member to `company` and log them in.

    Returns {id, username, companyId, isAdmin, token, headers, email}.
    """

    async def _make(username: str = "member1", email: str = None, **extra) -> dict:
        email = email or f"{username}@acme.test"
        r = await client.post(
            f"{API}/companies/{company['companyId']}/users",
            json={"username": username, "email": email, "password": PASSWORD, **extra},
            headers=company["headers"],
        )
        assert r.status_code == 200, r.text
        r = await client.post(f"{API}/auth", json={"email": email, "password": PASSWORD})
        assert r.status_code == 200, r.text
        data = r.json()
        data["headers"] = bearer(data["token"])
        data["email"] = email
        return data

    return _make
