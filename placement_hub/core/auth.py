"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from placement_hub.core.config import get_settings
from placement_hub.core.errors import AuthError, NotFoundError, PermissionDeniedError
from placement_hub.db.mongodb import COLLECTIONS, get_collection, to_object_id

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor
bearer_scheme = HTTPBearer()


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    payload = decode_token(credentials.credentials)
    if not payload:
        raise AuthError()

    user_id = payload.get("sub")
    if not user_id:
        raise AuthError()

    # Verify user still exists; role comes from the stored account, not the token
    try:
        oid = to_object_id(user_id, "User")
    except NotFoundError:
        raise AuthError()
    user = get_collection(COLLECTIONS["users"]).find_one({"_id": oid}, {"username": 1, "role": 1})
    if not user:
        raise AuthError()

    return {"user_id": str(user["_id"]), "username": user["username"], "role": user["role"]}


async def get_current_moderator(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require moderator role."""
    if user["role"] != "moderator":
        raise PermissionDeniedError("Moderators only")
    return user
