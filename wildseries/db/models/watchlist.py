# wildseries/db/models/watchlist.py
from __future__ import annotations

"""
🔖 Wild Series · Watchlist (user ↔ program bookmark)

Pure association table. The composite primary key `(user_id, program_id)`
makes membership a set, which the toggle in
`wildseries.services.watchlist_service` relies on for
`INSERT ... ON CONFLICT DO NOTHING`.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Table, func
from sqlalchemy.dialects.postgresql import UUID

from wildseries.db.base_class import Base

watchlist = Table(
    "watchlist",
    Base.metadata,
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "program_id",
        UUID(as_uuid=True),
        ForeignKey("programs.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("created_at", DateTime(timezone=True), server_default=func.now(), nullable=False),
    Index("ix_watchlist_program_id", "program_id"),
)
