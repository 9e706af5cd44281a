"""
Wild Series · Episodes
======================

- GET    /episode/                     : List (optional `search` on title)
- GET    /episode/new                  : Episode form (JSON schema)
- POST   /episode/new                  : Create (auth); slug from title, email sent
- GET    /episode/{episode_id}         : Episode with comments
- GET    /episode/{episode_id}/edit    : Current values (auth)
- POST   /episode/{episode_id}/edit    : Partial update (auth)
- DELETE /episode/{episode_id}         : CSRF-checked delete → 303 /episode/
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Form, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.api.v1.serializers import ser_comment, ser_episode, with_delete_token
from wildseries.core.csrf import delete_intention, is_csrf_token_valid
from wildseries.core.exceptions import NotFoundException
from wildseries.core.limiter import rate_limit
from wildseries.core.security import get_current_user
from wildseries.db.models.comment import Comment
from wildseries.db.models.episode import Episode
from wildseries.db.models.season import Season
from wildseries.db.models.user import User
from wildseries.db.session import get_async_db
from wildseries.schemas.episode import EpisodeIn, EpisodeUpdate
from wildseries.utils.email_utils import send_new_episode_email
from wildseries.utils.forms import bind_form
from wildseries.utils.search import LIKE_ESCAPE, contains_pattern
from wildseries.utils.slug import generate_slug

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/episode", tags=["Episodes"])


async def _episode_by_id(db: AsyncSession, episode_id: UUID) -> Episode:
    episode = (await db.execute(select(Episode).where(Episode.id == episode_id))).scalar_one_or_none()
    if not episode:
        raise NotFoundException("Episode")
    return episode


async def _ensure_season(db: AsyncSession, season_id: UUID) -> None:
    found = (await db.execute(select(Season.id).where(Season.id == season_id))).scalar_one_or_none()
    if not found:
        raise NotFoundException("Season")


@router.get("/", name="episode_index", summary="List episodes (optional title search)")
async def list_episodes(
    search: Optional[str] = Query(None, max_length=255),
    db: AsyncSession = Depends(get_async_db),
) -> List[Dict[str, object]]:
    stmt = select(Episode)
    pattern = contains_pattern(search)
    if pattern is not None:
        stmt = stmt.where(Episode.title.ilike(pattern, escape=LIKE_ESCAPE))
    rows = (await db.execute(stmt.order_by(Episode.title.asc()))).scalars().all() or []
    return [ser_episode(e) for e in rows]


@router.get("/new", name="episode_new_form", summary="Episode form schema")
async def new_episode_form() -> Dict[str, object]:
    return EpisodeIn.model_json_schema()


@router.post("/new", name="episode_new", status_code=status.HTTP_201_CREATED, summary="Create episode")
@rate_limit("10/minute")
async def create_episode(
    payload: EpisodeIn,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    await _ensure_season(db, payload.season_id)

    episode = Episode(
        season_id=payload.season_id,
        number=payload.number,
        title=payload.title,
        synopsis=payload.synopsis,
        slug=generate_slug(payload.title),
    )
    db.add(episode)
    await db.flush()
    await db.commit()
    await db.refresh(episode)

    body = ser_episode(episode)
    logger.info("Episode created id=%s season=%s by=%s", episode.id, episode.season_id, current_user.id)
    background_tasks.add_task(send_new_episode_email, dict(body))
    return body


@router.get("/{episode_id}", name="episode_show", summary="Episode with its comments")
async def show_episode(episode_id: UUID, db: AsyncSession = Depends(get_async_db)) -> Dict[str, object]:
    episode = await _episode_by_id(db, episode_id)
    comments = (
        await db.execute(
            select(Comment).where(Comment.episode_id == episode.id).order_by(Comment.created_at.asc())
        )
    ).scalars().all() or []
    body = with_delete_token(ser_episode(episode))
    body["comments"] = [ser_comment(c) for c in comments]
    return body


@router.get("/{episode_id}/edit", name="episode_edit_form", summary="Current values for the edit form")
async def edit_episode_form(
    episode_id: UUID,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    return ser_episode(await _episode_by_id(db, episode_id))


@router.post("/{episode_id}/edit", name="episode_edit", summary="Update episode")
@rate_limit("10/minute")
async def edit_episode(
    episode_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    episode = await _episode_by_id(db, episode_id)
    payload = await bind_form(request, EpisodeUpdate)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("season_id") is not None:
        await _ensure_season(db, changes["season_id"])
    for field, value in changes.items():
        if value is None and field in ("season_id", "number", "title"):
            continue
        setattr(episode, field, value)

    await db.commit()
    await db.refresh(episode)
    return ser_episode(episode)


@router.delete("/{episode_id}", name="episode_delete", summary="Delete episode (CSRF token required)")
@rate_limit("10/minute")
async def delete_episode(
    episode_id: UUID,
    request: Request,
    token: Optional[str] = Form(None, alias="_token"),
    db: AsyncSession = Depends(get_async_db),
) -> RedirectResponse:
    episode = await _episode_by_id(db, episode_id)
    if is_csrf_token_valid(delete_intention(episode.id), token):
        await db.execute(delete(Episode).where(Episode.id == episode.id))
        await db.commit()
        logger.info("Episode deleted id=%s", episode.id)
    else:
        logger.warning("Episode delete skipped: invalid CSRF token id=%s", episode.id)
    return RedirectResponse(
        url=request.app.url_path_for("episode_index"),
        status_code=status.HTTP_303_SEE_OTHER,
    )
