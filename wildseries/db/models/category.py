# wildseries/db/models/category.py
from __future__ import annotations

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from wildseries.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Category(UUIDPKMixin, TimestampMixin, Base):
    """Genre bucket for programs (e.g. Horreur, Aventure)."""

    __tablename__ = "categories"

    name = Column(String(100), nullable=False, unique=True)

    programs = relationship("Program", back_populates="category", lazy="raise", passive_deletes=True)
