# app/realtime/registry.py
import logging
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from fastapi.encoders import jsonable_encoder

from models.user import User

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    AUTHENTICATED = "authenticated"
    ACTIVE = "active"
    CLOSED = "closed"


class Connection:
    """One socket client and the identity bound to it at handshake."""

    def __init__(self, websocket, connection_id: Optional[str] = None):
        self.id = connection_id or str(uuid.uuid4())
        self.websocket = websocket
        self.state = ConnectionState.CONNECTING
        self.user: Optional[User] = None
        self.rooms: Set[str] = set()

    @property
    def is_active(self) -> bool:
        return self.state == ConnectionState.ACTIVE

    async def send(self, event: str, data: Any) -> None:
        await self.websocket.send_json({"event": event, "data": jsonable_encoder(data)})


class ConnectionRegistry:
    """Live connections and room membership.

    Only touched from the event loop, so plain dicts are enough.
    """

    def __init__(self):
        self.connections: Dict[str, Connection] = {}
        self.rooms: Dict[str, Set[str]] = {}

    def register(self, connection: Connection) -> None:
        self.connections[connection.id] = connection

    def join(self, connection: Connection, room: str) -> None:
        self.rooms.setdefault(room, set()).add(connection.id)
        connection.rooms.add(room)

    def unregister(self, connection: Connection) -> None:
        connection.state = ConnectionState.CLOSED
        self.connections.pop(connection.id, None)
        for room in connection.rooms:
            members = self.rooms.get(room)
            if members is None:
                continue
            members.discard(connection.id)
            if not members:
                del self.rooms[room]
        connection.rooms.clear()

    def members(self, room: str) -> List[Connection]:
        return [
            self.connections[cid]
            for cid in self.rooms.get(room, ())
            if cid in self.connections and self.connections[cid].is_active
        ]

    def active(self) -> List[Connection]:
        return [c for c in self.connections.values() if c.is_active]

    def __len__(self):
        return len(self.connections)
