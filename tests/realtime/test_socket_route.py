"""/ws over a real ASGI websocket.

TestClient runs the app on its own event loop, so the accepted-connection
test uses a file database with NullPool instead of the shared in-memory one.
"""

import pytest
from anyio.from_thread import start_blocking_portal
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from core.security import create_access_token, hash_password
from main import app
from models import Base, User
from realtime.hub import hub
from realtime.registry import ConnectionRegistry


@pytest.mark.parametrize("kwargs", [
    {},
    {"headers": {"Authorization": "Bearer not-a-token"}},
])
def test_handshake_without_valid_token_is_closed_4401(kwargs):
    client = TestClient(app)
    with client.websocket_connect("/ws", **kwargs) as ws:
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_text()
    assert exc.value.code == 4401


def test_query_token_is_checked_too():
    client = TestClient(app)
    with client.websocket_connect("/ws?token=garbage") as ws:
        with pytest.raises(WebSocketDisconnect) as exc:
            ws.receive_json()
    assert exc.value.code == 4401


@pytest.fixture
def socket_user(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/socket.sqlite", poolclass=NullPool)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def setup():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with session_factory() as db:
            user = User(
                email="socket@example.com",
                hashed_password=hash_password("secret123"),
                full_name="Sam Socket",
                role="user",
                is_verified=True,
            )
            db.add(user)
            await db.commit()
            await db.refresh(user)
            return user

    with start_blocking_portal() as portal:
        user = portal.call(setup)

    original = hub.session_factory, hub.registry
    hub.session_factory = session_factory
    hub.registry = ConnectionRegistry()
    yield user
    hub.session_factory, hub.registry = original

    with start_blocking_portal() as portal:
        portal.call(engine.dispose)


def test_donation_create_round_trip(socket_user):
    token = create_access_token(subject=socket_user.id)
    client = TestClient(app)

    with client.websocket_connect(f"/ws?token={token}") as ws:
        ws.send_json({"event": "donation:create", "data": {"amount": 650}})
        created = ws.receive_json()
        stats = ws.receive_json()

        ws.send_text("not json")
        error = ws.receive_json()

    assert created["event"] == "donation:created"
    assert created["data"]["amount"] == 650
    assert created["data"]["status"] == "pending"
    assert stats == {
        "event": "stats:update",
        "data": {"total_raised": 0, "total_donations": 0, "total_supporters": 0},
    }
    assert error == {"event": "error", "data": {"message": "Malformed message"}}
    assert len(hub.registry) == 0
