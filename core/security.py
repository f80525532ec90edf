# app/core/security.py
import hashlib
import secrets
from datetime import datetime, timedelta, timezone

from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from core.config import settings
from core.exceptions import AuthenticationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALGORITHM = settings.ALGORITHM


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def _signing_secret() -> str:
    if not settings.SECRET_KEY:
        raise AuthenticationError("Signing secret not configured")
    return settings.SECRET_KEY


def create_access_token(subject: str, expires_minutes: int = None, extra_data: dict = None):
    """Signed access token for a user id."""
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {
        "sub": subject,
        "exp": expire,
        "type": "access",
        "iat": datetime.now(timezone.utc)
    }

    if extra_data:
        payload.update(extra_data)

    return jwt.encode(payload, _signing_secret(), algorithm=ALGORITHM)


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def decode_token(token: str) -> str:
    """Verify a bearer token and return the user id it was issued for.

    Used by the HTTP dependencies and by the realtime handshake alike.
    """
    if not token:
        raise AuthenticationError("Not authenticated")
    try:
        payload = jwt.decode(token, _signing_secret(), algorithms=[ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid or expired token")

    user_id = payload.get("sub")
    if not user_id or payload.get("type", "access") != "access":
        raise AuthenticationError("Invalid token")
    return user_id


def extract_bearer(value: str) -> str:
    """'Bearer abc' -> 'abc'; anything else is returned stripped."""
    if not value:
        return ""
    value = value.strip()
    if value.lower().startswith("bearer "):
        return value[7:].strip()
    return value


def generate_reset_token() -> tuple:
    """Returns (raw token for the email link, sha256 digest to store)."""
    token = secrets.token_hex(32)
    return token, hash_reset_token(token)


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()
