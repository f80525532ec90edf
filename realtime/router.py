# app/realtime/router.py
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from core.exceptions import AuthenticationError, StoreUnavailableError
from core.security import extract_bearer
from realtime.hub import hub
from realtime.registry import Connection

logger = logging.getLogger(__name__)

router = APIRouter()

POLICY_VIOLATION = 4401


@router.websocket("/ws")
async def notifications_socket(websocket: WebSocket):
    """Events for one client, handled one at a time in arrival order."""
    token = websocket.query_params.get("token") or extract_bearer(websocket.headers.get("authorization"))
    connection = Connection(websocket)

    await websocket.accept()
    try:
        await hub.authenticate(connection, token)
    except AuthenticationError as e:
        logger.warning(f"Socket rejected: {e.message}")
        await websocket.close(code=POLICY_VIOLATION, reason="Authentication error")
        return
    except StoreUnavailableError:
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
        return

    try:
        while True:
            raw = await websocket.receive_text()
            await hub.handle(connection, raw)
    except WebSocketDisconnect as e:
        logger.debug(f"Socket {connection.id} closed by client ({e.code})")
    finally:
        hub.disconnect(connection)
