"""
Wild Series · Seasons
=====================

Write path for seasons; the nested `/programs/...` routes read them.

- GET    /season/                     : List (optional `program_id` filter)
- GET    /season/new                  : Season form (JSON schema)
- POST   /season/new                  : Create (auth)
- GET    /season/{season_id}          : Season with episodes
- GET    /season/{season_id}/edit     : Current values (auth)
- POST   /season/{season_id}/edit     : Partial update (auth)
- DELETE /season/{season_id}          : CSRF-checked delete → 303 /season/
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.api.v1.serializers import ser_episode, ser_season, with_delete_token
from wildseries.core.csrf import delete_intention, is_csrf_token_valid
from wildseries.core.exceptions import NotFoundException
from wildseries.core.limiter import rate_limit
from wildseries.core.security import get_current_user
from wildseries.db.models.episode import Episode
from wildseries.db.models.program import Program
from wildseries.db.models.season import Season
from wildseries.db.models.user import User
from wildseries.db.session import get_async_db
from wildseries.schemas.season import SeasonIn, SeasonUpdate
from wildseries.utils.forms import bind_form

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/season", tags=["Seasons"])


async def _season_by_id(db: AsyncSession, season_id: UUID) -> Season:
    season = (await db.execute(select(Season).where(Season.id == season_id))).scalar_one_or_none()
    if not season:
        raise NotFoundException("Season")
    return season


@router.get("/", name="season_index", summary="List seasons")
async def list_seasons(
    program_id: Optional[UUID] = Query(None, description="Only seasons of this program"),
    db: AsyncSession = Depends(get_async_db),
) -> List[Dict[str, object]]:
    stmt = select(Season)
    if program_id is not None:
        stmt = stmt.where(Season.program_id == program_id)
    rows = (await db.execute(stmt.order_by(Season.program_id, Season.number.asc()))).scalars().all() or []
    return [ser_season(s) for s in rows]


@router.get("/new", name="season_new_form", summary="Season form schema")
async def new_season_form() -> Dict[str, object]:
    return SeasonIn.model_json_schema()


@router.post("/new", name="season_new", status_code=status.HTTP_201_CREATED, summary="Create season")
@rate_limit("10/minute")
async def create_season(
    payload: SeasonIn,
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    program = (await db.execute(select(Program.id).where(Program.id == payload.program_id))).scalar_one_or_none()
    if not program:
        raise NotFoundException("Program")

    season = Season(
        program_id=payload.program_id,
        number=payload.number,
        year=payload.year,
        description=payload.description,
    )
    db.add(season)
    await db.flush()
    await db.commit()
    await db.refresh(season)
    return ser_season(season)


@router.get("/{season_id}", name="season_show", summary="Season with its episodes")
async def show_season(season_id: UUID, db: AsyncSession = Depends(get_async_db)) -> Dict[str, object]:
    season = await _season_by_id(db, season_id)
    episodes = (
        await db.execute(select(Episode).where(Episode.season_id == season.id).order_by(Episode.number.asc()))
    ).scalars().all() or []
    body = with_delete_token(ser_season(season))
    body["episodes"] = [ser_episode(e) for e in episodes]
    return body


@router.get("/{season_id}/edit", name="season_edit_form", summary="Current values for the edit form")
async def edit_season_form(
    season_id: UUID,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    return ser_season(await _season_by_id(db, season_id))


@router.post("/{season_id}/edit", name="season_edit", summary="Update season")
@rate_limit("10/minute")
async def edit_season(
    season_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    season = await _season_by_id(db, season_id)
    payload = await bind_form(request, SeasonUpdate)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "number" and value is None:
            continue
        setattr(season, field, value)
    await db.commit()
    await db.refresh(season)
    return ser_season(season)


@router.delete("/{season_id}", name="season_delete", summary="Delete season (CSRF token required)")
@rate_limit("10/minute")
async def delete_season(
    season_id: UUID,
    request: Request,
    token: Optional[str] = Form(None, alias="_token"),
    db: AsyncSession = Depends(get_async_db),
) -> RedirectResponse:
    season = await _season_by_id(db, season_id)
    if is_csrf_token_valid(delete_intention(season.id), token):
        await db.execute(delete(Season).where(Season.id == season.id))
        await db.commit()
        logger.info("Season deleted id=%s", season.id)
    else:
        logger.warning("Season delete skipped: invalid CSRF token id=%s", season.id)
    return RedirectResponse(
        url=request.app.url_path_for("season_index"),
        status_code=status.HTTP_303_SEE_OTHER,
    )
