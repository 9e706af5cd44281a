# wildseries/db/models/__init__.py
"""ORM models. Importing this package registers every table on `Base.metadata`."""

from wildseries.db.models.user import User
from wildseries.db.models.category import Category
from wildseries.db.models.program import Program, program_actor
from wildseries.db.models.actor import Actor
from wildseries.db.models.season import Season
from wildseries.db.models.episode import Episode
from wildseries.db.models.comment import Comment
from wildseries.db.models.watchlist import watchlist

__all__ = [
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
