# wildseries/db/models/actor.py
from __future__ import annotations

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from wildseries.db.base_class import Base, TimestampMixin, UUIDPKMixin
from wildseries.db.models.program import program_actor


class Actor(UUIDPKMixin, TimestampMixin, Base):
    """Cast member; linked to programs through `program_actor`."""

    __tablename__ = "actors"

    name = Column(String(255), nullable=False, index=True)

    programs = relationship(
        "Program",
        secondary=program_actor,
        back_populates="actors",
        lazy="raise",
        passive_deletes=True,
    )
