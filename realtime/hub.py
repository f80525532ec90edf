# app/realtime/hub.py
"""Real-time notification hub.

Clients authenticate once at handshake with the same bearer token the HTTP
API accepts. An authenticated connection joins ``user:<id>`` and, for
admins, ``admin``; only then does it become active and receive events.

Inbound events mutate donations through ``DonationService``; every success
is followed by a fresh totals broadcast. Failures go back to the sender as
an ``error`` event and nothing is broadcast. The HTTP routes that create or
review donations push through the same ``notify_*`` methods.
"""
import json
import logging
from typing import Any, Callable, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.websockets import WebSocketDisconnect

from core.database import AsyncSessionLocal
from core.exceptions import AppError, AuthorizationError, StoreUnavailableError, first_error_message
from core.permissions import authenticate_token
from models.donation import Donation
from models.user import User
from realtime import events
from realtime.registry import Connection, ConnectionRegistry, ConnectionState
from services.donation_service import DonationService
from services.statistics_service import StatisticsService

logger = logging.getLogger(__name__)

FAILED = {
    events.DONATION_CREATE: "Failed to create donation",
    events.DONATION_UPDATE_STATUS: "Failed to update donation status",
}


class NotificationHub:
    def __init__(self, session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
                 registry: Optional[ConnectionRegistry] = None):
        self.session_factory = session_factory
        self.registry = registry or ConnectionRegistry()

    # ---------- lifecycle ----------
    async def authenticate(self, connection: Connection, token: str) -> User:
        """Bind an identity to the connection and make it active.

        Raises ``AuthenticationError`` for a missing, invalid or orphaned
        token; the connection then never becomes active.
        """
        async with self.session_factory() as db:
            user = await authenticate_token(token, db)

        connection.user = user
        connection.state = ConnectionState.AUTHENTICATED
        self.registry.register(connection)
        self.registry.join(connection, events.user_room(user.id))
        if user.is_admin:
            self.registry.join(connection, events.ADMIN_ROOM)
        connection.state = ConnectionState.ACTIVE

        logger.info(f"Socket connected: {user.id} ({connection.id})")
        return user

    def disconnect(self, connection: Connection) -> None:
        if connection.state == ConnectionState.CLOSED:
            return
        self.registry.unregister(connection)
        user_id = connection.user.id if connection.user else None
        logger.info(f"Socket disconnected: {user_id} ({connection.id})")

    # ---------- inbound ----------
    async def handle(self, connection: Connection, raw: str) -> None:
        """Process one inbound frame. Never raises for client mistakes."""
        if not connection.is_active:
            return

        try:
            envelope = events.Envelope.model_validate(json.loads(raw))
        except (ValueError, PydanticValidationError):
            await self.send(connection, events.ERROR, {"message": "Malformed message"})
            return

        schema = events.INBOUND_EVENTS.get(envelope.event)
        if schema is None:
            await self.send(connection, events.ERROR, {"message": f"Unknown event: {envelope.event}"})
            return

        try:
            payload = schema.model_validate(envelope.data)
        except PydanticValidationError as e:
            await self.send(connection, events.ERROR, {"message": first_error_message(e.errors())})
            return

        try:
            async with self.session_factory() as db:
                if envelope.event == events.DONATION_CREATE:
                    await self._on_donation_create(connection, payload, db)
                else:
                    await self._on_update_status(connection, payload, db)
        except StoreUnavailableError:
            await self.send(connection, events.ERROR, {"message": FAILED[envelope.event]})
        except AppError as e:
            await self.send(connection, events.ERROR, {"message": e.message})

    async def _on_donation_create(self, connection: Connection, payload: events.DonationCreateEvent, db):
        donation = await DonationService(db).create_donation(payload, connection.user)

        await self.send(connection, events.DONATION_CREATED, events.DonationCreatedPayload.model_validate(donation))
        await self.notify_donation_created(donation, db)

    async def _on_update_status(self, connection: Connection, payload: events.DonationStatusUpdateEvent, db):
        if not connection.user.is_admin:
            raise AuthorizationError("Unauthorized")

        donation = await DonationService(db).update_donation_status(
            payload.donationId, payload.status.value, connection.user
        )
        await self.notify_status_updated(donation, db)

    # ---------- outbound ----------
    async def notify_donation_created(self, donation: Donation, db: AsyncSession) -> None:
        """Show a new donation to admins and refresh everyone's totals."""
        await self.emit_room(events.ADMIN_ROOM, events.DONATION_NEW, events.DonationNewPayload.model_validate(donation))
        await self.broadcast_stats(db)

    async def notify_status_updated(self, donation: Donation, db: AsyncSession) -> None:
        """Tell the owner about a status change and refresh everyone's totals."""
        await self.emit_room(
            events.user_room(donation.user_id),
            events.DONATION_STATUS_UPDATED,
            events.DonationStatusPayload.model_validate(donation),
        )
        await self.broadcast_stats(db)

    async def broadcast_stats(self, db: AsyncSession) -> None:
        # the change is already committed; a failed read only skips this broadcast
        try:
            totals = await StatisticsService(db).get_totals()
        except StoreUnavailableError:
            logger.error("Totals unavailable, skipping stats broadcast")
            return
        await self.broadcast(events.STATS_UPDATE, totals)

    async def broadcast(self, event: str, data: Any) -> None:
        for connection in self.registry.active():
            await self.send(connection, event, data)

    async def emit_room(self, room: str, event: str, data: Any) -> None:
        for connection in self.registry.members(room):
            await self.send(connection, event, data)

    async def send(self, connection: Connection, event: str, data: Any) -> bool:
        try:
            await connection.send(event, data)
            return True
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            logger.warning(f"Dropping dead socket {connection.id}: {e!r}")
            self.disconnect(connection)
            return False


hub = NotificationHub()
