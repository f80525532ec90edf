# app/api/v1/endpoints/donation.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from core.database import get_db
from core.dependencies import get_request_meta
from core.permissions import get_current_user, require_admin
from models.user import User
from realtime.hub import hub
from schemas.communication_method import CommunicationMethodRead
from schemas.donation import (
    DonationCreate, DonationStatus, DonationStatusUpdate, DonationRead, DonationDetail,
    DonationStatusResult, DonationFilter, DonationList, DonationTotals, MyDonationStats, TopSupporters,
)
from schemas.payment_method import PaymentMethodRead
from services.donation_service import DonationService
from services.reference_data_service import ReferenceDataService, PAYMENT_METHODS, COMMUNICATION_METHODS
from services.statistics_service import StatisticsService

router = APIRouter()


# --------------------------
# 1️⃣ donations
# --------------------------

@router.post("", response_model=DonationDetail, status_code=status.HTTP_201_CREATED)
async def create_donation(
        donation_data: DonationCreate,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
        meta: dict = Depends(get_request_meta),
):
    service = DonationService(db, meta)
    donation = await service.create_donation(donation_data, current_user)
    await hub.notify_donation_created(donation, db)
    return (await service.with_profiles([donation]))[0]


@router.get("/my", response_model=List[DonationRead])
async def my_donations(
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    return await DonationService(db).list_user_donations(current_user)


@router.get("/my-stats", response_model=MyDonationStats)
async def my_stats(
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    return await StatisticsService(db).get_user_totals(current_user)


# --------------------------
# 2️⃣ public
# --------------------------

@router.get("/stats", response_model=DonationTotals)
async def donation_stats(db: AsyncSession = Depends(get_db)):
    return await StatisticsService(db).get_totals()


@router.get("/top-supporters", response_model=TopSupporters)
async def top_supporters(
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
        db: AsyncSession = Depends(get_db),
):
    return await StatisticsService(db).get_top_supporters(page, limit)


@router.get("/payment-methods", response_model=List[PaymentMethodRead])
async def active_payment_methods(db: AsyncSession = Depends(get_db)):
    return await ReferenceDataService(db, PAYMENT_METHODS).list(active_only=True)


@router.get("/communication-methods", response_model=List[CommunicationMethodRead])
async def active_communication_methods(db: AsyncSession = Depends(get_db)):
    return await ReferenceDataService(db, COMMUNICATION_METHODS).list(active_only=True)


# --------------------------
# 3️⃣ listing & review
# --------------------------

@router.get("", response_model=DonationList)
async def list_donations(
        status: Optional[DonationStatus] = Query(None),
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    """Admins see every donation, everyone else only their own."""
    return await DonationService(db).list_donations(
        DonationFilter(status=status), current_user, page, limit
    )


@router.patch("/{donation_id}/status", response_model=DonationStatusResult)
async def update_donation_status(
        donation_id: str,
        data: DonationStatusUpdate,
        admin: User = Depends(require_admin),
        db: AsyncSession = Depends(get_db),
        meta: dict = Depends(get_request_meta),
):
    donation = await DonationService(db, meta).update_donation_status(donation_id, data.status.value, admin)
    await hub.notify_status_updated(donation, db)
    return donation
