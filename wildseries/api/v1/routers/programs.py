"""
Wild Series · Programs
======================

Catalog endpoints for programs (TV series) and the nested season/episode
read routes.

Endpoints
---------
- GET    /programs/                                              : List (optional `search` on title)
- GET    /programs/new                                           : Program form (JSON schema)
- POST   /programs/new                                           : Create (auth); slug + owner set, email sent
- GET    /programs/{slug}                                        : Program with seasons and actors
- GET    /programs/{program_slug}/seasons/{season_id}            : Season with episodes
- GET    /programs/{program_slug}/seasons/{season_id}/episodes/{episode_slug}
                                                                 : Episode with comments
- GET    /programs/{slug}/edit                                   : Current values (owner only)
- POST   /programs/{slug}/edit                                   : Partial update (owner only)
- DELETE /programs/{program_id}                                  : CSRF-checked delete → 303 /programs/
- GET|POST /programs/{program_id}/watchlist                      : Toggle watchlist → {"isInWatchlist": bool}

Conventions
-----------
- Slugs are not unique; a bare slug resolves to the oldest program.
- `new` is a route segment, so a title slugging to `new` is stored as `new-1`.
- Nested routes verify the parent chain and 404 on any mismatch.
- Ownership is checked before the edit body is read, so a non-owner always
  gets 403 whatever they submit.
- A delete with a missing/invalid `_token` does nothing and still redirects.
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Form, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.api.v1.serializers import (
    ser_actor,
    ser_comment,
    ser_episode,
    ser_program,
    ser_season,
    with_delete_token,
)
from wildseries.core.csrf import delete_intention, is_csrf_token_valid
from wildseries.core.exceptions import NotFoundException
from wildseries.core.limiter import rate_limit
from wildseries.core.security import get_current_user
from wildseries.db.models.actor import Actor
from wildseries.db.models.category import Category
from wildseries.db.models.comment import Comment
from wildseries.db.models.episode import Episode
from wildseries.db.models.program import Program, program_actor
from wildseries.db.models.season import Season
from wildseries.db.models.user import User
from wildseries.db.session import get_async_db
from wildseries.schemas.program import ProgramIn, ProgramUpdate, WatchlistStatus
from wildseries.services.authorization import ensure_program_owner
from wildseries.services.watchlist_service import toggle_watchlist
from wildseries.utils.email_utils import send_new_program_email
from wildseries.utils.forms import bind_form
from wildseries.utils.search import LIKE_ESCAPE, contains_pattern
from wildseries.utils.slug import PROGRAM_RESERVED_SLUGS, generate_slug

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/programs", tags=["Programs"])


# ─────────────────────────────────────────────────────────────────────────────
# 🧩 Helpers
# ─────────────────────────────────────────────────────────────────────────────

async def _program_by_slug(db: AsyncSession, slug: str) -> Program:
    """Oldest program with `slug`, or 404."""
    program = (
        await db.execute(
            select(Program).where(Program.slug == slug).order_by(Program.created_at.asc()).limit(1)
        )
    ).scalar_one_or_none()
    if not program:
        raise NotFoundException("Program")
    return program


async def _program_by_id(db: AsyncSession, program_id: UUID) -> Program:
    program = (await db.execute(select(Program).where(Program.id == program_id))).scalar_one_or_none()
    if not program:
        raise NotFoundException("Program")
    return program


async def _ensure_category(db: AsyncSession, category_id: Optional[UUID]) -> None:
    if category_id is None:
        return
    found = (await db.execute(select(Category.id).where(Category.id == category_id))).scalar_one_or_none()
    if not found:
        raise NotFoundException("Category")


async def _set_actors(db: AsyncSession, program_id: UUID, actor_ids: List[UUID], *, replace: bool) -> None:
    """Link `actor_ids` to the program; with `replace`, drop existing links first."""
    wanted = list(dict.fromkeys(actor_ids))
    if wanted:
        found = (await db.execute(select(Actor.id).where(Actor.id.in_(wanted)))).scalars().all()
        if len(set(found)) != len(wanted):
            raise NotFoundException("Actor", details={"missing": [str(a) for a in set(wanted) - set(found)]})
    if replace:
        await db.execute(delete(program_actor).where(program_actor.c.program_id == program_id))
    if wanted:
        await db.execute(
            insert(program_actor),
            [{"program_id": program_id, "actor_id": actor_id} for actor_id in wanted],
        )


async def _actors_of(db: AsyncSession, program_id: UUID) -> List[Actor]:
    rows = (
        await db.execute(
            select(Actor)
            .join(program_actor, program_actor.c.actor_id == Actor.id)
            .where(program_actor.c.program_id == program_id)
            .order_by(Actor.name.asc())
        )
    ).scalars().all()
    return list(rows or [])


# ─────────────────────────────────────────────────────────────────────────────
# 📜 List / Search
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/", name="program_index", summary="List programs (optional title search)")
async def list_programs(
    search: Optional[str] = Query(None, max_length=255, description="Case-insensitive title substring"),
    db: AsyncSession = Depends(get_async_db),
) -> List[Dict[str, object]]:
    stmt = select(Program)
    pattern = contains_pattern(search)
    if pattern is not None:
        stmt = stmt.where(Program.title.ilike(pattern, escape=LIKE_ESCAPE))
    rows = (await db.execute(stmt.order_by(Program.title.asc()))).scalars().all() or []
    return [ser_program(p) for p in rows]


# ─────────────────────────────────────────────────────────────────────────────
# ➕ Create
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/new", name="program_new_form", summary="Program form schema")
async def new_program_form() -> Dict[str, object]:
    return ProgramIn.model_json_schema()


@router.post("/new", name="program_new", status_code=status.HTTP_201_CREATED, summary="Create program")
@rate_limit("10/minute")
async def create_program(
    payload: ProgramIn,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    """
    Create a program owned by the caller.

    Steps
    -----
    1) Validate optional category and actors.
    2) Persist with `slug = generate_slug(title)` and `owner = caller`.
    3) Queue the "new program" notification email.
    """
    await _ensure_category(db, payload.category_id)

    program = Program(
        title=payload.title,
        slug=generate_slug(payload.title, reserved=PROGRAM_RESERVED_SLUGS),
        summary=payload.summary,
        poster=payload.poster,
        category_id=payload.category_id,
        owner_id=current_user.id,
    )
    db.add(program)
    await db.flush()
    await _set_actors(db, program.id, payload.actor_ids, replace=False)
    await db.commit()
    await db.refresh(program)

    body = ser_program(program)
    body["actor_ids"] = [str(a) for a in dict.fromkeys(payload.actor_ids)]
    logger.info("Program created id=%s slug=%s owner=%s", program.id, program.slug, current_user.id)
    background_tasks.add_task(send_new_program_email, dict(body))
    return body


# ─────────────────────────────────────────────────────────────────────────────
# 🔎 Show (program / nested season / nested episode)
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/{slug}", name="program_show", summary="Program with its seasons")
async def show_program(slug: str, db: AsyncSession = Depends(get_async_db)) -> Dict[str, object]:
    program = await _program_by_slug(db, slug)
    seasons = (
        await db.execute(select(Season).where(Season.program_id == program.id).order_by(Season.number.asc()))
    ).scalars().all() or []
    actors = await _actors_of(db, program.id)

    body = with_delete_token(ser_program(program))
    body["seasons"] = [ser_season(s) for s in seasons]
    body["actors"] = [ser_actor(a) for a in actors]
    return body


async def _resolve_season(db: AsyncSession, program_slug: str, season_id: UUID) -> tuple:
    """Season `season_id` and its program, which must carry `program_slug`."""
    season = (await db.execute(select(Season).where(Season.id == season_id))).scalar_one_or_none()
    if not season:
        raise NotFoundException("Season")
    program = (
        await db.execute(
            select(Program).where(Program.id == season.program_id, Program.slug == program_slug)
        )
    ).scalar_one_or_none()
    if not program:
        raise NotFoundException("Program")
    return program, season


@router.get(
    "/{program_slug}/seasons/{season_id}",
    name="program_season_show",
    summary="Season of a program, with its episodes",
)
async def show_season(
    program_slug: str,
    season_id: UUID,
    db: AsyncSession = Depends(get_async_db),
) -> Dict[str, object]:
    program, season = await _resolve_season(db, program_slug, season_id)
    episodes = (
        await db.execute(select(Episode).where(Episode.season_id == season.id).order_by(Episode.number.asc()))
    ).scalars().all() or []
    return {
        "program": ser_program(program),
        "season": ser_season(season),
        "episodes": [ser_episode(e) for e in episodes],
    }


@router.get(
    "/{program_slug}/seasons/{season_id}/episodes/{episode_slug}",
    name="program_episode_show",
    summary="Episode of a season, with its comments",
)
async def show_episode(
    program_slug: str,
    season_id: UUID,
    episode_slug: str,
    db: AsyncSession = Depends(get_async_db),
) -> Dict[str, object]:
    program, season = await _resolve_season(db, program_slug, season_id)
    episode = (
        await db.execute(
            select(Episode)
            .where(Episode.season_id == season.id, Episode.slug == episode_slug)
            .order_by(Episode.created_at.asc())
            .limit(1)
        )
    ).scalar_one_or_none()
    if not episode:
        raise NotFoundException("Episode")
    comments = (
        await db.execute(
            select(Comment).where(Comment.episode_id == episode.id).order_by(Comment.created_at.asc())
        )
    ).scalars().all() or []
    return {
        "program": ser_program(program),
        "season": ser_season(season),
        "episode": with_delete_token(ser_episode(episode)),
        "comments": [with_delete_token(ser_comment(c)) for c in comments],
    }


# ─────────────────────────────────────────────────────────────────────────────
# ✏️ Edit (owner only)
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/{slug}/edit", name="program_edit_form", summary="Current values for the edit form")
async def edit_program_form(
    slug: str,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    program = await _program_by_slug(db, slug)
    ensure_program_owner(current_user, program)

    body = ser_program(program)
    body["actor_ids"] = [str(a.id) for a in await _actors_of(db, program.id)]
    return body


@router.post("/{slug}/edit", name="program_edit", summary="Update program (owner only)")
@rate_limit("10/minute")
async def edit_program(
    slug: str,
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> Dict[str, object]:
    program = await _program_by_slug(db, slug)
    ensure_program_owner(current_user, program)

    payload = await bind_form(request, ProgramUpdate)
    changes = payload.model_dump(exclude_unset=True)
    actor_ids = changes.pop("actor_ids", None)

    if "category_id" in changes:
        await _ensure_category(db, changes["category_id"])
    for field, value in changes.items():
        setattr(program, field, value)
    if actor_ids is not None:
        await _set_actors(db, program.id, actor_ids, replace=True)

    await db.commit()
    await db.refresh(program)
    logger.info("Program updated id=%s fields=%s", program.id, sorted(changes))
    return ser_program(program)


# ─────────────────────────────────────────────────────────────────────────────
# 🗑️ Delete (CSRF)
# ─────────────────────────────────────────────────────────────────────────────
@router.delete("/{program_id}", name="program_delete", summary="Delete program (CSRF token required)")
@rate_limit("10/minute")
async def delete_program(
    program_id: UUID,
    request: Request,
    token: Optional[str] = Form(None, alias="_token"),
    db: AsyncSession = Depends(get_async_db),
) -> RedirectResponse:
    program = await _program_by_id(db, program_id)
    if is_csrf_token_valid(delete_intention(program.id), token):
        await db.execute(delete(Program).where(Program.id == program.id))
        await db.commit()
        logger.info("Program deleted id=%s", program.id)
    else:
        logger.warning("Program delete skipped: invalid CSRF token id=%s", program.id)
    return RedirectResponse(
        url=request.app.url_path_for("program_index"),
        status_code=status.HTTP_303_SEE_OTHER,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 🔖 Watchlist toggle
# ─────────────────────────────────────────────────────────────────────────────
@router.api_route(
    "/{program_id}/watchlist",
    methods=["GET", "POST"],
    name="program_watchlist",
    response_model=WatchlistStatus,
    response_model_by_alias=True,
    summary="Toggle the program in the caller's watchlist",
)
@rate_limit("30/minute")
async def watchlist_toggle(
    program_id: UUID,
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    current_user: User = Depends(get_current_user),
) -> WatchlistStatus:
    program = await _program_by_id(db, program_id)
    in_list = await toggle_watchlist(db, user_id=current_user.id, program_id=program.id)
    return WatchlistStatus(is_in_watchlist=in_list)
