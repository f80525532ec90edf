"""Shared fixtures: in-memory database, HTTP client, users, tokens and sockets.

Every test gets a fresh in-memory SQLite database; the app's ``get_db``
dependency and the realtime hub both use its session factory.
"""

import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.database import get_db
from core.security import create_access_token, hash_password
from main import app
from models import Base, User
from realtime.hub import hub
from realtime.registry import Connection, ConnectionRegistry


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def test_hub(test_session_factory):
    """The app wide hub, pointed at the test database with no clients."""
    original = hub.session_factory, hub.registry
    hub.session_factory = test_session_factory
    hub.registry = ConnectionRegistry()
    yield hub
    hub.session_factory, hub.registry = original


@pytest.fixture
async def client(test_session_factory, test_hub):
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


# -- Users -------------------------------------------------------------------

async def _make_user(db, email, role="user", full_name="Test User", password="secret123"):
    user = User(
        email=email,
        hashed_password=hash_password(password),
        full_name=full_name,
        role=role,
        is_verified=True,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
def make_user(test_db):
    async def _factory(email, role="user", full_name="Test User", password="secret123"):
        return await _make_user(test_db, email, role, full_name, password)
    return _factory


@pytest.fixture
async def donor(make_user):
    return await make_user("donor@example.com", full_name="Dana Donor")


@pytest.fixture
async def admin(make_user):
    return await make_user("admin@example.com", role="admin", full_name="Ada Admin")


def auth_header(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject=user.id)}"}


@pytest.fixture
def donor_headers(donor):
    return auth_header(donor)


@pytest.fixture
def admin_headers(admin):
    return auth_header(admin)


@pytest.fixture
def headers_for():
    return auth_header


# -- Sockets -----------------------------------------------------------------

class FakeSocket:
    """Stands in for a websocket and records the frames sent to it."""

    def __init__(self, dead=False):
        self.sent = []
        self.dead = dead

    async def send_json(self, message):
        if self.dead:
            raise RuntimeError("socket closed")
        self.sent.append(message)

    def events(self, name=None):
        return [m for m in self.sent if name is None or m["event"] == name]


@pytest.fixture
def fake_socket():
    return FakeSocket


@pytest.fixture
def connect(test_hub):
    """Authenticate a user on the test hub through a FakeSocket."""
    async def _connect(user, dead=False):
        connection = Connection(FakeSocket(dead=dead))
        await test_hub.authenticate(connection, create_access_token(subject=user.id))
        return connection
    return _connect
