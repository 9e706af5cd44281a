# wildseries/services/watchlist_service.py
"""
Watchlist membership
====================

A user's watchlist is the set of rows in `watchlist(user_id, program_id)`.

Toggle semantics
----------------
1. `DELETE ... RETURNING` the membership row.
2. If nothing was deleted, `INSERT ... ON CONFLICT DO NOTHING`.
3. Commit once.

Two concurrent toggles for the same pair can never create a duplicate row:
the composite primary key absorbs the second insert.
"""

from __future__ import annotations

import logging
from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from wildseries.db.models.program import Program
from wildseries.db.models.watchlist import watchlist

logger = logging.getLogger(__name__)


async def toggle_watchlist(db: AsyncSession, *, user_id: UUID, program_id: UUID) -> bool:
    """Flip membership of `program_id` in the user's watchlist.

    Returns the membership after the toggle.
    """
    removed = (
        await db.execute(
            delete(watchlist)
            .where(watchlist.c.user_id == user_id, watchlist.c.program_id == program_id)
            .returning(watchlist.c.program_id)
        )
    ).first()

    if removed is not None:
        is_in_watchlist = False
    else:
        await db.execute(
            pg_insert(watchlist)
            .values(user_id=user_id, program_id=program_id)
            .on_conflict_do_nothing(index_elements=[watchlist.c.user_id, watchlist.c.program_id])
        )
        is_in_watchlist = True

    await db.commit()
    logger.info("Watchlist toggled user=%s program=%s in=%s", user_id, program_id, is_in_watchlist)
    return is_in_watchlist


async def list_watchlist(db: AsyncSession, *, user_id: UUID) -> List[Program]:
    """Programs in the user's watchlist, most recently added first."""
    rows = (
        await db.execute(
            select(Program)
            .join(watchlist, watchlist.c.program_id == Program.id)
            .where(watchlist.c.user_id == user_id)
            .order_by(watchlist.c.created_at.desc())
        )
    ).scalars().all()
    return list(rows or [])


__all__ = ["toggle_watchlist", "list_watchlist"]
