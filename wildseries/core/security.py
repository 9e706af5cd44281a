# wildseries/core/security.py
from __future__ import annotations

"""
Wild Series · Authentication Helpers
====================================
- Password hashing (passlib/bcrypt)
- Access token creation (iat/nbf/exp/jti)
- FastAPI dependencies resolving the **current user** per request

The authenticated identity is never ambient: handlers receive it through
`Depends(get_current_user)` (401 when anonymous) or
`Depends(get_optional_user)` (None when anonymous).
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4
import logging

from fastapi import Depends, Request
from jose import jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.core.config import settings
from wildseries.core.exceptions import AuthenticationRequiredException
from wildseries.core.jwt import decode_access_token, get_bearer_token
from wildseries.db.models.user import User
from wildseries.db.session import get_async_db

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = logging.getLogger("wildseries.security")


# ───────────────────────────────────────────────
# 🔐 Password Hashing Utilities
# ───────────────────────────────────────────────
def get_password_hash(password: str) -> str:
    """Return a salted hash using Passlib's bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# ───────────────────────────────────────────────
# 🪪 JWT: Access Token Generation
# ───────────────────────────────────────────────
def create_access_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed **access token** for `user_id`."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "exp": expire,
        "iat": now,
        "nbf": now,
        "jti": str(uuid4()),
        "token_type": "access",
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY.get_secret_value(), algorithm=settings.JWT_ALGORITHM)


def get_user_id_from_payload(payload: Dict[str, Any]) -> UUID:
    """Extract `sub` as a UUID; 401 if malformed/missing."""
    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationRequiredException("Invalid token: missing subject")
    try:
        return UUID(str(user_id))
    except ValueError:
        raise AuthenticationRequiredException("Invalid token: malformed subject")


# ───────────────────────────────────────────────
# 👤 Dependencies: current user
# ───────────────────────────────────────────────
async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_async_db),
) -> Optional[User]:
    """Return the authenticated user, or None when no bearer token is sent.

    A token that is present but invalid still fails with 401.
    """
    token = get_bearer_token(request)
    if token is None:
        return None

    payload = decode_access_token(token)
    user_id = get_user_id_from_payload(payload)

    user = (await db.execute(select(User).where(User.id == user_id))).scalar_one_or_none()
    if user is None or not user.is_active:
        raise AuthenticationRequiredException("Inactive or missing user")

    request.state.user_id = user.id
    logger.debug("Authenticated user %s", user.id)
    return user


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Require an authenticated, active user (401 otherwise)."""
    if user is None:
        raise AuthenticationRequiredException()
    return user


__all__ = [
    "get_password_hash",
    "verify_password",
    "create_access_token",
    "get_user_id_from_payload",
    "get_optional_user",
    "get_current_user",
]
