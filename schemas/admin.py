# app/schemas/admin.py
from pydantic import BaseModel
from typing import Optional, List, Dict, Any
from datetime import datetime

from schemas.user import UserRead
from utils.pagination import Pagination


class StatusBucket(BaseModel):
    status: str
    count: int
    total_amount: float


class RoleBucket(BaseModel):
    role: str
    count: int


class MonthlyTrend(BaseModel):
    year: int
    month: int
    total_amount: float
    count: int


class ActivityActor(BaseModel):
    id: str
    full_name: str
    email: str

    class Config:
        from_attributes = True


class ActivityLogRead(BaseModel):
    id: str
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    user: Optional[ActivityActor] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AdminOverview(BaseModel):
    donations: List[StatusBucket]
    users: List[RoleBucket]
    recent_activity: List[ActivityLogRead]
    monthly_trends: List[MonthlyTrend]


class UserList(BaseModel):
    users: List[UserRead]
    pagination: Pagination
