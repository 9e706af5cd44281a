# wildseries/db/models/season.py
from __future__ import annotations

"""
📺 Wild Series · Season

Belongs to exactly one Program. `number` is 1-based; `year` is the first
air year when known.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from wildseries.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Season(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "seasons"

    program_id = Column(
        UUID(as_uuid=True),
        ForeignKey("programs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Parent program.",
    )

    number = Column(Integer, nullable=False, doc="Ordinal season number (1-based).")
    year = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("number >= 1", name="season_number_positive"),
        Index("ix_seasons_program_number", "program_id", "number"),
    )

    program = relationship("Program", back_populates="seasons", lazy="raise")
    episodes = relationship("Episode", back_populates="season", lazy="raise", passive_deletes=True)
