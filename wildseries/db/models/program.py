# wildseries/db/models/program.py
from __future__ import annotations

"""
📺 Wild Series · Program (a TV series)
======================================

Top of the catalog hierarchy: Program → Season → Episode → Comment.

- `slug` is derived from the title once, at creation; it is indexed but
  **not** unique, so slug lookups order by `created_at` and take the first.
- `owner_id` is nullable (SET NULL when the owner is deleted); a program
  without an owner cannot be edited through the API.
- Deleting a program cascades in the database to seasons, episodes,
  comments, actor links and watchlist rows.

Relationships are declared `lazy="raise"`; handlers traverse with explicit
`select(...)` queries.
"""

from sqlalchemy import Column, ForeignKey, Index, String, Table, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from wildseries.db.base_class import Base, TimestampMixin, UUIDPKMixin

program_actor = Table(
    "program_actor",
    Base.metadata,
    Column(
        "program_id",
        UUID(as_uuid=True),
        ForeignKey("programs.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "actor_id",
        UUID(as_uuid=True),
        ForeignKey("actors.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Index("ix_program_actor_actor_id", "actor_id"),
)


class Program(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "programs"

    # ── Catalog data ────────────────────────────────────────────
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, index=True, doc="Derived from title at creation; not unique.")
    summary = Column(Text, nullable=False)
    poster = Column(String(2048), nullable=True, doc="Poster image URL.")

    # ── Foreign keys ────────────────────────────────────────────
    category_id = Column(
        UUID(as_uuid=True),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    owner_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_programs_slug_created", "slug", "created_at"),
    )

    # ── Relationships ───────────────────────────────────────────
    category = relationship("Category", back_populates="programs", lazy="raise")
    owner = relationship("User", back_populates="programs", lazy="raise")
    seasons = relationship("Season", back_populates="program", lazy="raise", passive_deletes=True)
    actors = relationship(
        "Actor",
        secondary=program_actor,
        back_populates="programs",
        lazy="raise",
        passive_deletes=True,
    )
    watchers = relationship(
        "User",
        secondary="watchlist",
        back_populates="watchlist",
        lazy="raise",
        passive_deletes=True,
    )
