"""
Wild Series • API v1 Router Aggregator
======================================

Exports the combined `router` and each sub-router so callers (and tests)
can mount them as needed.

Quick usage
-----------
    from wildseries.api.v1.routers import router as v1_router
    app.include_router(v1_router, prefix=settings.API_V1_STR)

Auth and rate limits live in the child routers.
"""

from fastapi import APIRouter

from .actors import router as actors_router
from .auth import router as auth_router
from .comments import router as comments_router
from .episodes import router as episodes_router
from .me import router as me_router
from .programs import router as programs_router
from .seasons import router as seasons_router


def build_v1_router() -> APIRouter:
    """Compose the catalog, auth and user routes into one `APIRouter`."""
    api = APIRouter()
    api.include_router(programs_router)
    api.include_router(seasons_router)
    api.include_router(episodes_router)
    api.include_router(comments_router)
    api.include_router(actors_router)
    api.include_router(auth_router)
    api.include_router(me_router)
    return api


router = build_v1_router()

__all__ = [
    "router",
    "build_v1_router",
    "programs_router",
    "seasons_router",
    "episodes_router",
    "comments_router",
    "actors_router",
    "auth_router",
    "me_router",
]
