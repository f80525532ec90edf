# app/services/donation_service.py
import logging
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import NotFoundError
from core.store import DocumentStore
from models.donation import Donation, DonationStatus
from models.user import User
from schemas.donation import (
    DonationCreate, DonationFilter, DonationDetail, DonationList,
)
from schemas.user import ProfileRead
from services.activity_log_service import ActivityLogService
from utils.pagination import paginate, skip_for

logger = logging.getLogger(__name__)


class DonationService:
    def __init__(self, db: AsyncSession, request_meta: Optional[Dict[str, Any]] = None):
        self.db = db
        self.store = DocumentStore(db)
        self.request_meta = request_meta or {}

    async def create_donation(self, donation_data: DonationCreate, donor: User) -> Donation:
        """New pending donation owned by ``donor``."""
        fields = donation_data.dict(exclude_unset=True)
        fields.pop("amount", None)

        donation = await self.store.create(
            Donation,
            user_id=donor.id,
            amount=donation_data.amount,
            status=DonationStatus.PENDING.value,
            is_anonymous=bool(fields.pop("is_anonymous", False)),
            # empty strings from forms are stored as missing
            **{key: value for key, value in fields.items() if value not in ("", None)},
        )

        await ActivityLogService(self.db).record(
            "CREATE_DONATION", "donations", donation.id, user=donor,
            details={"amount": donation.amount}, **self.request_meta
        )
        logger.info(f"Donation {donation.id} created by {donor.id} ({donation.amount})")
        return donation

    async def update_donation_status(self, donation_id: str, new_status: str, actor: User) -> Donation:
        """Change the status, stamping confirmed_at / completed_at on first entry.

        The "only if unset" check reads then writes, so two concurrent
        confirmations may both stamp; both values are the same instant give
        or take, and the last write wins.
        """
        donation = await self.store.get(Donation, donation_id)
        if not donation:
            raise NotFoundError("Donation not found")

        old_status = donation.status
        patch = {"status": new_status}
        now = datetime.now(timezone.utc)
        if new_status == DonationStatus.CONFIRMED.value and not donation.confirmed_at:
            patch["confirmed_at"] = now
        if new_status == DonationStatus.COMPLETED.value and not donation.completed_at:
            patch["completed_at"] = now

        donation = await self.store.update_by_id(Donation, donation_id, patch)
        if not donation:
            raise NotFoundError("Donation not found")

        await ActivityLogService(self.db).record(
            "UPDATE_DONATION_STATUS", "donations", donation.id, user=actor,
            details={"from": old_status, "to": new_status}, **self.request_meta
        )
        return donation

    async def get_donation(self, donation_id: str) -> Donation:
        donation = await self.store.get(Donation, donation_id)
        if not donation:
            raise NotFoundError("Donation not found")
        return donation

    async def list_user_donations(self, user: User) -> List[Donation]:
        return await self.store.find(
            Donation,
            {"user_id": user.id},
            order_by=[Donation.created_at.desc()],
        )

    async def list_donations(
            self,
            filters: DonationFilter,
            current_user: User,
            page: int = 1,
            limit: int = 20,
    ) -> DonationList:
        """Paged list; non admins only ever see their own donations."""
        query: Dict[str, Any] = {}
        if filters.status:
            query["status"] = filters.status.value
        if filters.user_id:
            query["user_id"] = filters.user_id
        if not current_user.is_admin:
            query["user_id"] = current_user.id

        donations = await self.store.find(
            Donation,
            query,
            order_by=[Donation.created_at.desc()],
            skip=skip_for(page, limit),
            limit=limit,
        )
        total = await self.store.count(Donation, query)

        return DonationList(
            donations=await self.with_profiles(donations),
            pagination=paginate(page, limit, total),
        )

    async def with_profiles(self, donations: List[Donation]) -> List[DonationDetail]:
        """Attach the owner's public profile to each donation."""
        owner_ids = {d.user_id for d in donations}
        owners = {}
        if owner_ids:
            owners = {u.id: u for u in await self.store.find(User, {"id": owner_ids})}

        result = []
        for donation in donations:
            detail = DonationDetail.model_validate(donation)
            owner = owners.get(donation.user_id)
            if owner:
                detail.profiles = ProfileRead.model_validate(owner)
            result.append(detail)
        return result
