"""
Wild Series · Response serializers
==================================

Stable, API-facing dicts for ORM rows. Read responses for deletable entities
carry `delete_token`, the CSRF value the matching DELETE route expects in
its `_token` field.
"""

from typing import Dict, Optional

from wildseries.core.csrf import delete_token_for
from wildseries.db.models.actor import Actor
from wildseries.db.models.comment import Comment
from wildseries.db.models.episode import Episode
from wildseries.db.models.program import Program
from wildseries.db.models.season import Season


def _opt_id(value) -> Optional[str]:
    return str(value) if value is not None else None


def ser_program(p: Program) -> Dict[str, object]:
    return {
        "id": str(p.id),
        "title": p.title,
        "slug": p.slug,
        "summary": p.summary,
        "poster": p.poster,
        "category_id": _opt_id(p.category_id),
        "owner_id": _opt_id(p.owner_id),
        "created_at": getattr(p, "created_at", None),
        "updated_at": getattr(p, "updated_at", None),
    }


def ser_season(s: Season) -> Dict[str, object]:
    return {
        "id": str(s.id),
        "program_id": str(s.program_id),
        "number": s.number,
        "year": s.year,
        "description": s.description,
        "created_at": getattr(s, "created_at", None),
        "updated_at": getattr(s, "updated_at", None),
    }


def ser_episode(e: Episode) -> Dict[str, object]:
    return {
        "id": str(e.id),
        "season_id": str(e.season_id),
        "number": e.number,
        "title": e.title,
        "slug": e.slug,
        "synopsis": e.synopsis,
        "created_at": getattr(e, "created_at", None),
        "updated_at": getattr(e, "updated_at", None),
    }


def ser_comment(c: Comment) -> Dict[str, object]:
    return {
        "id": str(c.id),
        "episode_id": str(c.episode_id),
        "author_id": str(c.author_id),
        "comment": c.comment,
        "created_at": getattr(c, "created_at", None),
        "updated_at": getattr(c, "updated_at", None),
    }


def ser_actor(a: Actor) -> Dict[str, object]:
    return {"id": str(a.id), "name": a.name}


def with_delete_token(body: Dict[str, object]) -> Dict[str, object]:
    """Attach the delete CSRF token for the entity serialized in `body`."""
    body["delete_token"] = delete_token_for(body["id"])
    return body


__all__ = [
    "ser_program",
    "ser_season",
    "ser_episode",
    "ser_comment",
    "ser_actor",
    "with_delete_token",
]
