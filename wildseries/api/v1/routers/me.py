"""
Wild Series · Current user

- GET /me            : Profile of the caller
- GET /me/watchlist  : Programs in the caller's watchlist
"""

from typing import Dict, List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.api.v1.serializers import ser_program
from wildseries.core.security import get_current_user
from wildseries.db.models.user import User
from wildseries.db.session import get_async_db
from wildseries.security_headers import set_sensitive_cache
from wildseries.services.watchlist_service import list_watchlist

router = APIRouter(prefix="/me", tags=["Me"])


@router.get("", summary="Current user profile")
async def read_me(response: Response, current_user: User = Depends(get_current_user)) -> Dict[str, object]:
    set_sensitive_cache(response)
    return {
        "id": str(current_user.id),
        "email": current_user.email,
        "username": current_user.username,
        "is_active": bool(current_user.is_active),
    }


@router.get("/watchlist", summary="Programs in my watchlist")
async def read_my_watchlist(
    response: Response,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> List[Dict[str, object]]:
    set_sensitive_cache(response)
    return [ser_program(p) for p in await list_watchlist(db, user_id=current_user.id)]
