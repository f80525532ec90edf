# app/services/statistics_service.py
"""Donation aggregates.

Every call recomputes from the stored donations; nothing is cached, so a
result is a snapshot of the store at the time of the query. Only confirmed
and completed donations count towards totals and the leaderboard.
"""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, case, extract
from typing import List

from core.config import settings
from core.store import DocumentStore
from models.donation import Donation, DonationStatus, COUNTED_STATUSES
from models.user import User
from schemas.admin import AdminOverview, StatusBucket, RoleBucket, MonthlyTrend, ActivityLogRead
from schemas.donation import DonationTotals, MyDonationStats, Supporter, TopSupporters
from services.activity_log_service import ActivityLogService
from utils.pagination import paginate, skip_for


class StatisticsService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = DocumentStore(db)

    # ---------- 1️⃣ global totals ----------
    async def get_totals(self) -> DonationTotals:
        query = select(
            func.coalesce(func.sum(Donation.amount), 0).label("total_raised"),
            func.count(Donation.id).label("total_donations"),
            func.count(func.distinct(Donation.user_id)).label("total_supporters"),
        ).where(Donation.status.in_(COUNTED_STATUSES))

        rows = await self.store.aggregate(query)
        stats = rows[0] if rows else None
        if stats is None:
            return DonationTotals()

        return DonationTotals(
            total_raised=float(stats.total_raised or 0),
            total_donations=stats.total_donations or 0,
            total_supporters=stats.total_supporters or 0,
        )

    # ---------- 2️⃣ leaderboard ----------
    async def get_top_supporters(self, page: int = 1, limit: int = 10) -> TopSupporters:
        """Donors ranked by their summed counted donations.

        A donor is shown as anonymous when any of their counted donations was
        made anonymously. Ties on amount are ordered by user id.
        """
        total_amount = func.sum(Donation.amount).label("total_amount")
        anonymous = func.max(case((Donation.is_anonymous.is_(True), 1), else_=0)).label("anonymous")

        grouped = (
            select(Donation.user_id.label("user_id"), total_amount, anonymous)
            .where(Donation.status.in_(COUNTED_STATUSES))
            .group_by(Donation.user_id)
            .subquery()
        )
        query = (
            select(grouped.c.user_id, grouped.c.total_amount, grouped.c.anonymous, User.full_name)
            .outerjoin(User, User.id == grouped.c.user_id)
            .order_by(grouped.c.total_amount.desc(), grouped.c.user_id.asc())
            .offset(skip_for(page, limit))
            .limit(limit)
        )
        rows = await self.store.aggregate(query)

        count_query = select(func.count(func.distinct(Donation.user_id))).where(
            Donation.status.in_(COUNTED_STATUSES)
        )
        count_rows = await self.store.aggregate(count_query)
        total = count_rows[0][0] if count_rows else 0

        supporters = []
        for row in rows:
            is_anonymous = bool(row.anonymous)
            supporters.append(Supporter(
                user_id=row.user_id,
                full_name=settings.ANONYMOUS_NAME if is_anonymous or not row.full_name else row.full_name,
                total_amount=float(row.total_amount or 0),
                is_anonymous=is_anonymous,
            ))

        return TopSupporters(supporters=supporters, pagination=paginate(page, limit, total or 0))

    # ---------- 3️⃣ personal stats ----------
    async def get_user_totals(self, user: User) -> MyDonationStats:
        query = (
            select(
                Donation.status,
                func.count(Donation.id).label("count"),
                func.coalesce(func.sum(Donation.amount), 0).label("amount"),
            )
            .where(Donation.user_id == user.id)
            .group_by(Donation.status)
        )
        rows = await self.store.aggregate(query)
        by_status = {row.status: row for row in rows}

        def count(*statuses) -> int:
            return sum(by_status[s].count for s in statuses if s in by_status)

        def amount(*statuses) -> float:
            return float(sum(by_status[s].amount for s in statuses if s in by_status))

        return MyDonationStats(
            total_contributed=amount(*COUNTED_STATUSES),
            pending_amount=amount(DonationStatus.PENDING.value),
            confirmed_count=count(*COUNTED_STATUSES),
            pending_count=count(DonationStatus.PENDING.value),
            cancelled_count=count(DonationStatus.CANCELLED.value),
            total_donations=sum(row.count for row in rows),
        )

    # ---------- 4️⃣ admin overview ----------
    async def get_admin_overview(self) -> AdminOverview:
        donation_rows = await self.store.aggregate(
            select(
                Donation.status,
                func.count(Donation.id).label("count"),
                func.coalesce(func.sum(Donation.amount), 0).label("total_amount"),
            ).group_by(Donation.status)
        )
        user_rows = await self.store.aggregate(
            select(User.role, func.count(User.id).label("count")).group_by(User.role)
        )

        return AdminOverview(
            donations=[
                StatusBucket(status=r.status, count=r.count, total_amount=float(r.total_amount))
                for r in donation_rows
            ],
            users=[RoleBucket(role=r.role, count=r.count) for r in user_rows],
            recent_activity=await self._recent_activity(),
            monthly_trends=await self._monthly_trends(),
        )

    async def _recent_activity(self, limit: int = 50) -> List[ActivityLogRead]:
        logs = await ActivityLogService(self.db).recent(limit)
        return [ActivityLogRead.model_validate(log) for log in logs]

    async def _monthly_trends(self, months: int = 12) -> List[MonthlyTrend]:
        year = extract("year", Donation.created_at)
        month = extract("month", Donation.created_at)
        query = (
            select(
                year.label("year"),
                month.label("month"),
                func.sum(Donation.amount).label("total_amount"),
                func.count(Donation.id).label("count"),
            )
            .where(Donation.status.in_(COUNTED_STATUSES))
            .group_by(year, month)
            .order_by(year.desc(), month.desc())
            .limit(months)
        )
        rows = await self.store.aggregate(query)
        return [
            MonthlyTrend(
                year=int(r.year),
                month=int(r.month),
                total_amount=float(r.total_amount or 0),
                count=r.count,
            )
            for r in rows
        ]
