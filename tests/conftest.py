"""Test fixtures — a fresh in-memory SQLite database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own in-memory engine (StaticPool keeps the single
   connection alive) with all tables created.
2. The app's get_db dependency is overridden to yield that test's session.
3. The engine is disposed after the test — nothing leaks between tests.

Env vars are set before tasktrack is imported so settings pick them up:
cheap bcrypt rounds and a SQLite URL for the module-level engine.
"""

import os

os.environ.setdefault("TASKTRACK_DATABASE_URL", "sqlite+aiosqlite:///./tasktrack-test.db")
os.environ.setdefault("TASKTRACK_BCRYPT_ROUNDS", "4")
os.environ.setdefault("TASKTRACK_JWT_SECRET", "test-secret-with-at-least-32-bytes!!")
os.environ.setdefault("TASKTRACK_AUTO_CREATE_TABLES", "false")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tasktrack.db.engine import build_engine, get_db  # noqa: E402
from tasktrack.db.models import Base  # noqa: E402
from tasktrack.main import app  # noqa: E402

TEST_DB_URL = "sqlite+aiosqlite://"

STRONG_PASSWORD = "Sup3r-secret"


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a brand-new in-memory database."""
    engine = build_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client against the real app with get_db overridden.

    Learn: Auth is NOT mocked — tests sign up and sign in through the API
    and send the real Bearer token, so the whole token pipeline runs.
    """
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def sign_in(client):
    """Factory: sign up + sign in a user, return Authorization headers.

    Usage: headers = await sign_in("bobby")
    """
    async def _sign_in(username: str, password: str = STRONG_PASSWORD) -> dict:
        r = await client.post(
            "/auth/signup", json={"username": username, "password": password}
        )
        assert r.status_code == 201, r.text
        r = await client.post(
            "/auth/signin", json={"username": username, "password": password}
        )
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['accessToken']}"}

    return _sign_in


@pytest_asyncio.fixture()
async def auth_headers(sign_in):
    """Bearer headers for a freshly registered user 'alice'."""
    return await sign_in("alice")
