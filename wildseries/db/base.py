# wildseries/db/base.py
"""
Wild Series · SQLAlchemy Base registry
======================================

Import all ORM models so their tables are registered on `Base.metadata`
(Alembic autogenerate and relationship resolution rely on this).

Keep this file import-only; no runtime logic.
"""

from wildseries.db.base_class import Base

# ───────────────────────────────────────────────────────────────
# Accounts
# ───────────────────────────────────────────────────────────────
from wildseries.db.models.user import User

# ───────────────────────────────────────────────────────────────
# Catalog: Programs, Seasons, Episodes, People
# ───────────────────────────────────────────────────────────────
from wildseries.db.models.category import Category
from wildseries.db.models.program import Program, program_actor
from wildseries.db.models.actor import Actor
from wildseries.db.models.season import Season
from wildseries.db.models.episode import Episode

# ───────────────────────────────────────────────────────────────
# Engagement
# ───────────────────────────────────────────────────────────────
from wildseries.db.models.comment import Comment
from wildseries.db.models.watchlist import watchlist

__all__ = [
    "Base",
    "User",
    "Category",
    "Program",
    "program_actor",
    "Actor",
    "Season",
    "Episode",
    "Comment",
    "watchlist",
]
