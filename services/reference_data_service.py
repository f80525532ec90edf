# app/services/reference_data_service.py
"""Admin managed lookup tables: payment methods, communication methods and
donation reasons. All three share the same list/create/update/delete flow."""
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Type

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundError
from core.store import DocumentStore
from models.base import Base
from models.communication_method import CommunicationMethod
from models.donation_reason import DonationReason
from models.payment_method import PaymentMethod
from models.user import User
from services.activity_log_service import ActivityLogService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resource:
    model: Type[Base]
    label: str  # used in messages
    action: str  # activity log suffix
    table: str
    ordered: bool  # has an admin controlled `order` column


PAYMENT_METHODS = Resource(PaymentMethod, "Payment method", "PAYMENT_METHOD", "payment_methods", True)
COMMUNICATION_METHODS = Resource(
    CommunicationMethod, "Communication method", "COMMUNICATION_METHOD", "communication_methods", True
)
DONATION_REASONS = Resource(DonationReason, "Reason", "DONATION_REASON", "donation_reasons", False)


def _plain(fields: Dict[str, Any]) -> Dict[str, Any]:
    # enum members are stored as their values
    return {k: getattr(v, "value", v) for k, v in fields.items()}


class ReferenceDataService:
    def __init__(self, db: AsyncSession, resource: Resource, request_meta: Optional[Dict[str, Any]] = None):
        self.db = db
        self.store = DocumentStore(db)
        self.resource = resource
        self.request_meta = request_meta or {}

    def _order_by(self) -> list:
        model = self.resource.model
        if self.resource.ordered:
            return [model.order.asc(), model.created_at.desc()]
        return [model.created_at.desc()]

    async def list(self, active_only: bool = False) -> List[Base]:
        filters = {"is_active": True} if active_only else None
        return await self.store.find(self.resource.model, filters, order_by=self._order_by())

    async def create(self, data: BaseModel, admin: User) -> Base:
        record = await self.store.create(self.resource.model, **_plain(data.dict()))
        await self._log("CREATE", record.id, admin, _plain(data.dict(exclude_unset=True)))
        return record

    async def update(self, record_id: str, data: BaseModel, admin: User) -> Base:
        patch = _plain(data.dict(exclude_unset=True))
        record = await self.store.update_by_id(self.resource.model, record_id, patch)
        if not record:
            raise NotFoundError(f"{self.resource.label} not found")

        await self._log("UPDATE", record.id, admin, patch)
        return record

    async def delete(self, record_id: str, admin: User) -> None:
        record = await self.store.delete_by_id(self.resource.model, record_id)
        if not record:
            raise NotFoundError(f"{self.resource.label} not found")

        await self._log("DELETE", record_id, admin)

    async def _log(self, verb: str, record_id: str, admin: User, details: Optional[dict] = None):
        await ActivityLogService(self.db).record(
            f"{verb}_{self.resource.action}", self.resource.table, record_id,
            user=admin, details=details, **self.request_meta
        )
        logger.info(f"{self.resource.label} {record_id}: {verb.lower()} by {admin.id}")
