# app/services/user_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, Dict, Any

from core.exceptions import AuthorizationError, NotFoundError
from core.store import DocumentStore
from models.user import User
from schemas.admin import UserList
from schemas.user import ProfileUpdate, UserRead, AdminUserCreate, Role
from services.activity_log_service import ActivityLogService
from services.auth_service import AuthService
from utils.pagination import paginate, skip_for


class UserService:
    def __init__(self, db: AsyncSession, request_meta: Optional[Dict[str, Any]] = None):
        self.db = db
        self.store = DocumentStore(db)
        self.request_meta = request_meta or {}

    # ---------- profile ----------
    async def get_profile(self, user_id: str) -> User:
        user = await self.store.get(User, user_id)
        if not user:
            raise NotFoundError("Profile not found")
        return user

    async def update_profile(self, user_id: str, update_data: ProfileUpdate, current_user: User) -> User:
        """Edit a profile; only its owner or an admin may"""

        if current_user.id != user_id and not current_user.is_admin:
            raise AuthorizationError("Not authorized to update this profile")

        update_dict = update_data.dict(exclude_unset=True)
        user = await self.store.update_by_id(User, user_id, update_dict)
        if not user:
            raise NotFoundError("Profile not found")

        await ActivityLogService(self.db).record(
            "UPDATE_PROFILE", "users", user.id, user=current_user,
            details={"fields": sorted(update_dict)}, **self.request_meta
        )
        return user

    # ---------- admin ----------
    async def list_users(self, page: int = 1, limit: int = 20) -> UserList:
        users = await self.store.find(
            User,
            order_by=[User.created_at.desc()],
            skip=skip_for(page, limit),
            limit=limit,
        )
        total = await self.store.count(User)
        return UserList(
            users=[UserRead.model_validate(u) for u in users],
            pagination=paginate(page, limit, total),
        )

    async def create_user(self, data: AdminUserCreate, admin: User) -> User:
        user = await AuthService(self.db, self.request_meta).register_user(
            data.email, data.password, data.full_name, role=data.role.value, is_verified=True
        )
        await ActivityLogService(self.db).record(
            "CREATE_USER", "users", user.id, user=admin,
            details={"email": user.email, "role": user.role}, **self.request_meta
        )
        return user

    async def update_role(self, user_id: str, role: Role, admin: User) -> User:
        user = await self.store.update_by_id(User, user_id, {"role": role.value})
        if not user:
            raise NotFoundError("User not found")

        await ActivityLogService(self.db).record(
            "UPDATE_USER_ROLE", "users", user.id, user=admin,
            details={"role": user.role}, **self.request_meta
        )
        return user
