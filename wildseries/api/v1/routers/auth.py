"""
Wild Series · Authentication
============================

- POST /auth/register : Create an account (201) and return an access token
- POST /auth/login    : Exchange email + password for an access token

Tokens are bearer JWTs (see `wildseries.core.security`). Token responses are
marked `no-store`.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.core.config import settings
from wildseries.core.exceptions import AuthenticationRequiredException, ConflictException
from wildseries.core.limiter import rate_limit
from wildseries.core.security import create_access_token, get_password_hash, verify_password
from wildseries.db.models.user import User
from wildseries.db.session import get_async_db
from wildseries.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from wildseries.security_headers import set_sensitive_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _token_for(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


# ──────────────────────────────────────────────────────
# 👤 Register
# ──────────────────────────────────────────────────────
@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new account and issue an access token",
)
@rate_limit("5/minute")
async def register(
    payload: RegisterRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_async_db),
) -> TokenResponse:
    set_sensitive_cache(response)
    email = payload.email.lower()

    existing = (
        await db.execute(select(User.id).where(func.lower(User.email) == email))
    ).scalar_one_or_none()
    if existing:
        raise ConflictException("Email already registered")
    if payload.username:
        taken = (
            await db.execute(select(User.id).where(User.username == payload.username))
        ).scalar_one_or_none()
        if taken:
            raise ConflictException("Username already taken")

    user = User(
        email=email,
        username=payload.username,
        hashed_password=get_password_hash(payload.password),
        is_active=True,
    )
    db.add(user)
    await db.flush()
    await db.commit()
    logger.info("User registered id=%s", user.id)
    return _token_for(user)


# ──────────────────────────────────────────────────────
# 🔑 Login
# ──────────────────────────────────────────────────────
@router.post("/login", response_model=TokenResponse, summary="Log in with email and password")
@rate_limit("10/minute")
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_async_db),
) -> TokenResponse:
    set_sensitive_cache(response)

    user = (
        await db.execute(select(User).where(func.lower(User.email) == payload.email.lower()))
    ).scalar_one_or_none()
    # Same error for unknown email and wrong password.
    if user is None or not verify_password(payload.password, user.hashed_password):
        raise AuthenticationRequiredException("Invalid email or password")
    if not user.is_active:
        raise AuthenticationRequiredException("Inactive or missing user")

    logger.info("User logged in id=%s", user.id)
    return _token_for(user)
