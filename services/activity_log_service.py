# app/services/activity_log_service.py
import logging
from typing import Optional, Dict, Any, List

from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import AppError
from core.store import DocumentStore
from models.activity_log import ActivityLog
from models.user import User

logger = logging.getLogger(__name__)


class ActivityLogService:
    """Append-only audit trail of state changing operations."""

    def __init__(self, db: AsyncSession):
        self.store = DocumentStore(db)

    async def record(
            self,
            action: str,
            resource_type: str,
            resource_id: Optional[str] = None,
            user: Optional[User] = None,
            details: Optional[Dict[str, Any]] = None,
            ip_address: Optional[str] = None,
            user_agent: Optional[str] = None,
    ) -> Optional[ActivityLog]:
        # a failed audit write never fails the operation it describes
        try:
            return await self.store.create(
                ActivityLog,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                user_id=user.id if user else None,
                details=details,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        except AppError as e:
            logger.error(f"Error logging activity {action}: {e.message}")
            return None

    async def recent(self, limit: int = 50) -> List[ActivityLog]:
        return await self.store.find(
            ActivityLog,
            order_by=[ActivityLog.created_at.desc()],
            limit=limit,
        )
