"""
Wild Series · Actors (read-only)

- GET /actor/              : List (optional `search` on name)
- GET /actor/{actor_id}    : Actor with the programs they play in
"""

from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.api.v1.serializers import ser_actor, ser_program
from wildseries.core.exceptions import NotFoundException
from wildseries.db.models.actor import Actor
from wildseries.db.models.program import Program, program_actor
from wildseries.db.session import get_async_db
from wildseries.utils.search import LIKE_ESCAPE, contains_pattern

router = APIRouter(prefix="/actor", tags=["Actors"])


@router.get("/", name="actor_index", summary="List actors")
async def list_actors(
    search: Optional[str] = Query(None, max_length=255),
    db: AsyncSession = Depends(get_async_db),
) -> List[Dict[str, object]]:
    stmt = select(Actor)
    pattern = contains_pattern(search)
    if pattern is not None:
        stmt = stmt.where(Actor.name.ilike(pattern, escape=LIKE_ESCAPE))
    rows = (await db.execute(stmt.order_by(Actor.name.asc()))).scalars().all() or []
    return [ser_actor(a) for a in rows]


@router.get("/{actor_id}", name="actor_show", summary="Actor with programs")
async def show_actor(actor_id: UUID, db: AsyncSession = Depends(get_async_db)) -> Dict[str, object]:
    actor = (await db.execute(select(Actor).where(Actor.id == actor_id))).scalar_one_or_none()
    if not actor:
        raise NotFoundException("Actor")
    programs = (
        await db.execute(
            select(Program)
            .join(program_actor, program_actor.c.program_id == Program.id)
            .where(program_actor.c.actor_id == actor.id)
            .order_by(Program.title.asc())
        )
    ).scalars().all() or []
    body = ser_actor(actor)
    body["programs"] = [ser_program(p) for p in programs]
    return body
