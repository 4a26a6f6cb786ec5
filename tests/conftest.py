"""
Shared test fixtures for the HRIS test suite.

Async throughout (aiosqlite + AsyncSession). API routes run as an HR
Manager via dependency overrides; HTML pages resolve the user from the
``access_token`` cookie, so page tests sign in with ``login_as``.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ["LOGIN_RATE_LIMIT"] = "1000/minute"
os.environ["BACKEND_URL"] = ""

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hris.api.v1.deps import get_current_active_user
from hris.client import ClientError, get_hris_client
from hris.core.security import create_access_token
from hris.db.base import Base
from hris.db.session import get_db
from hris.main import app
from hris.models.user import User

# A separate test engine shared by every request in the session
test_engine = create_async_engine(
    "sqlite+aiosqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest.fixture(autouse=True)
async def setup_db():
    """Create all tables before usage and drop after."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with TestingSessionLocal() as session:
        yield session


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with TestingSessionLocal() as session:
        yield session


# ── Auth Overrides ──────────────────────────────────────────────────
async def _override_get_current_active_user():
    return User(id="test-manager", email="manager@example.com", is_active=True, role="HR Manager")


app.dependency_overrides[get_current_active_user] = _override_get_current_active_user


@pytest.fixture
def act_as_role():
    """Make API calls run as a user with *role* for the rest of the test."""

    def _set(role: str) -> None:
        async def _user():
            return User(id=f"test-{role}", email="someone@example.com", is_active=True, role=role)

        app.dependency_overrides[get_current_active_user] = _user

    yield _set
    app.dependency_overrides[get_current_active_user] = _override_get_current_active_user


@pytest.fixture
def login_as(async_client: AsyncClient, db_session: AsyncSession):
    """Store a user with *role* and put their access token in the cookie jar."""

    async def _login(role: str = "HR Manager", email: str | None = None) -> User:
        user = User(
            email=email or f"{role.lower().replace(' ', '.')}@example.com",
            hashed_password="not-used",
            role=role,
            is_active=True,
        )
        db_session.add(user)
        await db_session.commit()
        async_client.cookies.set("access_token", f"Bearer {create_access_token(user.id)}")
        return user

    return _login


# ── Fake remote client ──────────────────────────────────────────────
class FakeEntityClient:
    """Records calls; ``fail_with`` makes every write raise that error."""

    def __init__(self, records: list[dict] | None = None) -> None:
        self.records = records or []
        self.calls: list[tuple] = []
        self.fail_with: ClientError | None = None

    async def _write(self, *call):
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    async def create(self, data):
        await self._write("create", data)
        return {"id": "new-id", **data.model_dump(mode="json")}

    async def update(self, obj_id, data):
        await self._write("update", obj_id, data)
        return {"id": obj_id, **data}

    async def delete(self, obj_id):
        await self._write("delete", obj_id)
        return {"success": True, "message": "deleted"}

    async def find_by_id(self, obj_id):
        for record in self.records:
            if record["id"] == obj_id:
                return record
        raise ClientError("Record not found", 404)

    async def find_many_with_count(self, query=None):
        return {"data": list(self.records), "count": len(self.records)}


class FakeHrisClient:
    def __init__(self) -> None:
        self.company = FakeEntityClient([{"id": "co-1", "name": "Acme", "description": None}])
        self.employee = FakeEntityClient(
            [{"id": "emp-1", "first_name": "Ada", "last_name": "Lovelace", "email": "ada@acme.test"}]
        )
        self.sick_leave = FakeEntityClient(
            [
                {
                    "id": "sl-1",
                    "start_date": "2026-03-02",
                    "end_date": "2026-03-04",
                    "doctor_note": True,
                    "employee_id": "emp-1",
                    "employee": {"email": "ada@acme.test"},
                }
            ]
        )

    def entity(self, name: str) -> FakeEntityClient:
        return getattr(self, name)


@pytest.fixture
def fake_client():
    client = FakeHrisClient()
    app.dependency_overrides[get_hris_client] = lambda: client
    yield client
    app.dependency_overrides.pop(get_hris_client, None)
