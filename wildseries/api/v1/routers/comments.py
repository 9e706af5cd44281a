"""
Wild Series · Comments
======================

- GET    /comment/                       : List (optional `search` on the body)
- GET    /comment/new/{episode_id}       : Comment form (JSON schema) for an episode
- POST   /comment/new/{episode_id}       : Create (auth, author = caller) → 303 nested episode page
- GET    /comment/{comment_id}           : Show
- GET    /comment/{comment_id}/edit      : Current values (author only)
- POST   /comment/{comment_id}/edit      : Update (author only)
- DELETE /comment/{comment_id}           : CSRF-checked delete → 303 nested episode page

The nested episode page is
`/programs/{program_slug}/seasons/{season_id}/episodes/{episode_slug}`; for
deletes it is resolved before the row is removed.
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.api.v1.serializers import ser_comment, with_delete_token
from wildseries.core.csrf import delete_intention, is_csrf_token_valid
from wildseries.core.exceptions import NotFoundException
from wildseries.core.limiter import rate_limit
from wildseries.core.security import get_current_user
from wildseries.db.models.comment import Comment
from wildseries.db.models.episode import Episode
from wildseries.db.models.program import Program
from wildseries.db.models.season import Season
from wildseries.db.models.user import User
from wildseries.db.session import get_async_db
from wildseries.schemas.comment import CommentIn, CommentUpdate
from wildseries.services.authorization import ensure_comment_author
from wildseries.utils.forms import bind_form
from wildseries.utils.search import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comment", tags=["Comments"])


# ─────────────────────────────────────────────────────────────────────────────
# 🧩 Helpers
# ─────────────────────────────────────────────────────────────────────────────

async def _comment_by_id(db: AsyncSession, comment_id: UUID) -> Comment:
    comment = (await db.execute(select(Comment).where(Comment.id == comment_id))).scalar_one_or_none()
    if not comment:
        raise NotFoundException("Comment")
    return comment


async def _episode_by_id(db: AsyncSession, episode_id: UUID) -> Episode:
    episode = (await db.execute(select(Episode).where(Episode.id == episode_id))).scalar_one_or_none()
    if not episode:
        raise NotFoundException("Episode")
    return episode


async def _episode_page(request: Request, db: AsyncSession, episode: Episode) -> str:
    """Path of the nested program/season/episode page for `episode`."""
    row = (
        await db.execute(
            select(Program.slug, Season.id)
            .join(Season, Season.program_id == Program.id)
            .where(Season.id == episode.season_id)
        )
    ).first()
    if row is None:
        raise NotFoundException("Season")
    program_slug, season_id = row
    return request.app.url_path_for(
        "program_episode_show",
        program_slug=program_slug,
        season_id=str(season_id),
        episode_slug=episode.slug,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 📜 List / Create
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/", name="comment_index", summary="List comments (optional text search)")
async def list_comments(
    search: Optional[str] = Query(None, max_length=255),
    db: AsyncSession = Depends(get_async_db),
) -> List[Dict[str, object]]:
    stmt = select(Comment)
    pattern = contains_pattern(search)
    if pattern is not None:
        stmt = stmt.where(Comment.comment.ilike(pattern, escape=LIKE_ESCAPE))
    rows = (await db.execute(stmt.order_by(Comment.created_at.desc()))).scalars().all() or []
    return [ser_comment(c) for c in rows]


@router.get("/new/{episode_id}", name="comment_new_form", summary="Comment form schema")
async def new_comment_form(episode_id: UUID, db: AsyncSession = Depends(get_async_db)) -> Dict[str, object]:
    episode = await _episode_by_id(db, episode_id)
    return {"episode_id": str(episode.id), "form": CommentIn.model_json_schema()}


@router.post("/new/{episode_id}", name="comment_new", summary="Comment an episode")
@rate_limit("20/minute")
async def create_comment(
    episode_id: UUID,
    payload: CommentIn,
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> RedirectResponse:
    episode = await _episode_by_id(db, episode_id)
    target = await _episode_page(request, db, episode)

    comment = Comment(episode_id=episode.id, author_id=current_user.id, comment=payload.comment)
    db.add(comment)
    await db.commit()
    logger.info("Comment created episode=%s author=%s", episode.id, current_user.id)
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)


# ─────────────────────────────────────────────────────────────────────────────
# 🔎 Show / Edit
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/{comment_id}", name="comment_show", summary="Show comment")
async def show_comment(comment_id: UUID, db: AsyncSession = Depends(get_async_db)) -> Dict[str, object]:
    return with_delete_token(ser_comment(await _comment_by_id(db, comment_id)))


@router.get("/{comment_id}/edit", name="comment_edit_form", summary="Current values (author only)")
async def edit_comment_form(
    comment_id: UUID,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    comment = await _comment_by_id(db, comment_id)
    ensure_comment_author(current_user, comment)
    return ser_comment(comment)


@router.post("/{comment_id}/edit", name="comment_edit", summary="Update comment (author only)")
@rate_limit("20/minute")
async def edit_comment(
    comment_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    comment = await _comment_by_id(db, comment_id)
    ensure_comment_author(current_user, comment)

    payload = await bind_form(request, CommentUpdate)
    comment.comment = payload.comment
    await db.commit()
    await db.refresh(comment)
    return ser_comment(comment)


# ─────────────────────────────────────────────────────────────────────────────
# 🗑️ Delete (CSRF)
# ─────────────────────────────────────────────────────────────────────────────
@router.delete("/{comment_id}", name="comment_delete", summary="Delete comment (CSRF token required)")
@rate_limit("20/minute")
async def delete_comment(
    comment_id: UUID,
    request: Request,
    token: Optional[str] = Form(None, alias="_token"),
    db: AsyncSession = Depends(get_async_db),
) -> RedirectResponse:
    comment = await _comment_by_id(db, comment_id)
    episode = await _episode_by_id(db, comment.episode_id)
    target = await _episode_page(request, db, episode)

    if is_csrf_token_valid(delete_intention(comment.id), token):
        await db.execute(delete(Comment).where(Comment.id == comment.id))
        await db.commit()
        logger.info("Comment deleted id=%s", comment.id)
    else:
        logger.warning("Comment delete skipped: invalid CSRF token id=%s", comment.id)
    return RedirectResponse(url=target, status_code=status.HTTP_303_SEE_OTHER)
