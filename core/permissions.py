# app/core/permissions.py
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import get_db
from core.exceptions import AuthenticationError, AuthorizationError
from core.security import decode_token, oauth2_scheme
from core.store import DocumentStore
from models.user import User
import logging
logger = logging.getLogger(__name__)


async def authenticate_token(token: str, db: AsyncSession) -> User:
    """Bearer token -> User, shared by HTTP requests and socket handshakes."""
    try:
        user_id = decode_token(token)
    except AuthenticationError as e:
        logger.warning(f"Invalid token: {e.message}")
        raise

    user = await DocumentStore(db).get(User, user_id)
    if not user:
        raise AuthenticationError("User not found")

    return user


async def get_current_user(
        token: str = Depends(oauth2_scheme),
        db: AsyncSession = Depends(get_db),
) -> User:
    return await authenticate_token(token, db)


def require_roles(*roles_allowed):
    def wrapper(user: User = Depends(get_current_user)):
        if user.role not in roles_allowed:
            raise AuthorizationError("Admin access required" if roles_allowed == ("admin",) else "Not authorized")
        return user
    return wrapper


require_admin = require_roles("admin")
