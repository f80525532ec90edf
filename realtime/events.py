# app/realtime/events.py
"""Socket event names and payload shapes.

Frames are JSON text: ``{"event": "<name>", "data": {...}}``.
"""
from pydantic import BaseModel
from datetime import datetime
from typing import Any, Dict

from schemas.donation import DonationCreate, DonationStatus

# ---------- inbound ----------
DONATION_CREATE = "donation:create"
DONATION_UPDATE_STATUS = "donation:update-status"

# ---------- outbound ----------
DONATION_CREATED = "donation:created"  # sender only
DONATION_NEW = "donation:new"  # admin room
DONATION_STATUS_UPDATED = "donation:status-updated"  # owner room
STATS_UPDATE = "stats:update"  # everyone
ERROR = "error"  # sender only

USER_ROOM = "user:{}"
ADMIN_ROOM = "admin"


class Envelope(BaseModel):
    event: str
    data: Dict[str, Any] = {}


class DonationCreateEvent(DonationCreate):
    pass


class DonationStatusUpdateEvent(BaseModel):
    donationId: str
    status: DonationStatus


class DonationCreatedPayload(BaseModel):
    id: str
    amount: float
    status: DonationStatus
    created_at: datetime

    class Config:
        from_attributes = True


class DonationNewPayload(DonationCreatedPayload):
    user_id: str


class DonationStatusPayload(BaseModel):
    id: str
    status: DonationStatus

    class Config:
        from_attributes = True


INBOUND_EVENTS = {
    DONATION_CREATE: DonationCreateEvent,
    DONATION_UPDATE_STATUS: DonationStatusUpdateEvent,
}


def user_room(user_id: str) -> str:
    return USER_ROOM.format(user_id)
