# app/api/v1/endpoints/admin.py
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional, Type

from core.database import get_db
from core.dependencies import get_request_meta
from core.permissions import require_admin
from models.user import User
from realtime.hub import hub
from schemas.admin import AdminOverview, UserList
from schemas.communication_method import (
    CommunicationMethodCreate, CommunicationMethodUpdate, CommunicationMethodRead,
)
from schemas.donation import DonationStatus, DonationStatusUpdate, DonationStatusResult, DonationFilter, DonationList
from schemas.donation_reason import DonationReasonCreate, DonationReasonUpdate, DonationReasonRead
from schemas.payment_method import PaymentMethodCreate, PaymentMethodUpdate, PaymentMethodRead
from schemas.user import AdminUserCreate, RoleUpdate, UserRead, MessageResponse
from services.donation_service import DonationService
from services.reference_data_service import (
    ReferenceDataService, Resource, PAYMENT_METHODS, COMMUNICATION_METHODS, DONATION_REASONS,
)
from services.statistics_service import StatisticsService
from services.user_service import UserService

# every route below requires the admin role
router = APIRouter(dependencies=[Depends(require_admin)])


# --------------------------
# 1️⃣ dashboard
# --------------------------

@router.get("/stats", response_model=AdminOverview)
async def admin_stats(db: AsyncSession = Depends(get_db)):
    return await StatisticsService(db).get_admin_overview()


# --------------------------
# 2️⃣ users
# --------------------------

@router.get("/users", response_model=UserList)
async def list_users(
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        db: AsyncSession = Depends(get_db),
):
    return await UserService(db).list_users(page, limit)


@router.post("/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
        user_data: AdminUserCreate,
        admin: User = Depends(require_admin),
        db: AsyncSession = Depends(get_db),
        meta: dict = Depends(get_request_meta),
):
    return await UserService(db, meta).create_user(user_data, admin)


@router.patch("/users/{user_id}/role", response_model=UserRead)
async def update_user_role(
        user_id: str,
        data: RoleUpdate,
        admin: User = Depends(require_admin),
        db: AsyncSession = Depends(get_db),
        meta: dict = Depends(get_request_meta),
):
    return await UserService(db, meta).update_role(user_id, data.role, admin)


# --------------------------
# 3️⃣ donations
# --------------------------

@router.get("/donations", response_model=DonationList)
async def list_donations(
        status: Optional[DonationStatus] = Query(None),
        user_id: Optional[str] = Query(None),
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        admin: User = Depends(require_admin),
        db: AsyncSession = Depends(get_db),
):
    return await DonationService(db).list_donations(
        DonationFilter(status=status, user_id=user_id), admin, page, limit
    )


@router.patch("/donations/{donation_id}/status", response_model=DonationStatusResult)
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


# --------------------------
# 4️⃣ reference data
# --------------------------

def add_reference_routes(
        path: str,
        resource: Resource,
        create_schema: Type[BaseModel],
        update_schema: Type[BaseModel],
        read_schema: Type[BaseModel],
):
    """List / create / update / delete routes for one lookup table."""

    @router.get(path, response_model=List[read_schema], name=f"list_{resource.table}")
    async def list_items(db: AsyncSession = Depends(get_db)):
        return await ReferenceDataService(db, resource).list()

    @router.post(path, response_model=read_schema, status_code=status.HTTP_201_CREATED,
                 name=f"create_{resource.table}")
    async def create_item(
            data: create_schema,
            admin: User = Depends(require_admin),
            db: AsyncSession = Depends(get_db),
            meta: dict = Depends(get_request_meta),
    ):
        return await ReferenceDataService(db, resource, meta).create(data, admin)

    @router.patch(path + "/{item_id}", response_model=read_schema, name=f"update_{resource.table}")
    async def update_item(
            item_id: str,
            data: update_schema,
            admin: User = Depends(require_admin),
            db: AsyncSession = Depends(get_db),
            meta: dict = Depends(get_request_meta),
    ):
        return await ReferenceDataService(db, resource, meta).update(item_id, data, admin)

    @router.delete(path + "/{item_id}", response_model=MessageResponse, name=f"delete_{resource.table}")
    async def delete_item(
            item_id: str,
            admin: User = Depends(require_admin),
            db: AsyncSession = Depends(get_db),
            meta: dict = Depends(get_request_meta),
    ):
        await ReferenceDataService(db, resource, meta).delete(item_id, admin)
        return MessageResponse(message=f"{resource.label} deleted successfully")


add_reference_routes("/reasons", DONATION_REASONS,
                     DonationReasonCreate, DonationReasonUpdate, DonationReasonRead)
add_reference_routes("/communication-methods", COMMUNICATION_METHODS,
                     CommunicationMethodCreate, CommunicationMethodUpdate, CommunicationMethodRead)
add_reference_routes("/payment-methods", PAYMENT_METHODS,
                     PaymentMethodCreate, PaymentMethodUpdate, PaymentMethodRead)
