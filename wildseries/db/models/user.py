# wildseries/db/models/user.py
from __future__ import annotations

"""
👤 Wild Series · User
=====================

Account that can log in, own programs, author comments and keep a watchlist.

- Email is unique **case-insensitively** (functional unique index on lower(email)).
- Passwords are stored as bcrypt hashes only (see `wildseries.core.security`).
"""

from sqlalchemy import Boolean, Column, Index, String, func, text
from sqlalchemy.orm import relationship

from wildseries.db.base_class import Base, TimestampMixin, UUIDPKMixin


class User(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "users"

    # ── Identity ────────────────────────────────────────────────
    email = Column(String(255), nullable=False, doc="Login email (unique, case-insensitive).")
    username = Column(String(50), nullable=True, unique=True)
    hashed_password = Column(String(255), nullable=False)

    # ── State ───────────────────────────────────────────────────
    is_active = Column(Boolean, nullable=False, server_default=text("true"), default=True)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("uq_users_email_lower", func.lower(email), unique=True),
    )

    # ── Relationships (explicit queries only) ───────────────────
    programs = relationship("Program", back_populates="owner", lazy="raise", passive_deletes=True)
    comments = relationship("Comment", back_populates="author", lazy="raise", passive_deletes=True)
    watchlist = relationship(
        "Program",
        secondary="watchlist",
        back_populates="watchers",
        lazy="raise",
        passive_deletes=True,
    )
