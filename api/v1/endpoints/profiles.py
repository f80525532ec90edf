# app/api/v1/endpoints/profiles.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.dependencies import get_request_meta
from core.permissions import get_current_user
from models.user import User
from schemas.user import ProfileRead, ProfileUpdate
from services.user_service import UserService

router = APIRouter()


@router.get("/{user_id}", response_model=ProfileRead)
async def get_profile(user_id: str, db: AsyncSession = Depends(get_db)):
    return await UserService(db).get_profile(user_id)


@router.patch("/{user_id}", response_model=ProfileRead)
async def update_profile(
        user_id: str,
        update_data: ProfileUpdate,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
        meta: dict = Depends(get_request_meta),
):
    return await UserService(db, meta).update_profile(user_id, update_data, current_user)
