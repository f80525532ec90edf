# app/api/v1/router.py
from fastapi import APIRouter
from api.v1.endpoints import (
    auth,
    donation,
    profiles,
    admin,
)

api_router = APIRouter()

# ========== 1️⃣ Authentication ==========
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])

# ========== 2️⃣ Donations ==========
api_router.include_router(donation.router, prefix="/donations", tags=["Donations"])

# ========== 3️⃣ Profiles ==========
api_router.include_router(profiles.router, prefix="/profiles", tags=["Profiles"])

# ========== 4️⃣ Admin ==========
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
