# wildseries/db/models/episode.py
from __future__ import annotations

"""
🎬 Wild Series · Episode

Belongs to exactly one Season. Like programs, the slug is derived from the
title at creation and is not unique; nested routes resolve it within the
season it is requested under.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from wildseries.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Episode(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "episodes"

    season_id = Column(
        UUID(as_uuid=True),
        ForeignKey("seasons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    number = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    synopsis = Column(Text, nullable=True)
    slug = Column(String(255), nullable=False, index=True)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("number >= 1", name="episode_number_positive"),
        Index("ix_episodes_season_slug", "season_id", "slug"),
    )

    season = relationship("Season", back_populates="episodes", lazy="raise")
    comments = relationship("Comment", back_populates="episode", lazy="raise", passive_deletes=True)
