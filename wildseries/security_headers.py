# wildseries/security_headers.py
"""
Wild Series · CORS & cache hardening
====================================

- `configure_cors(app)` installs an allow-list CORS policy from
  `settings.BACKEND_CORS_ORIGINS` (never `*` with credentials).
- `set_sensitive_cache(response)` marks token-bearing responses as
  `no-store`.
"""

from typing import Iterable, Optional

from fastapi import Response
from starlette.middleware.cors import CORSMiddleware

from wildseries.core.config import settings


def set_sensitive_cache(response: Response, *, seconds: int = 0) -> None:
    """`no-store` by default; `seconds > 0` allows a short private cache."""
    if seconds <= 0:
        response.headers.setdefault("Cache-Control", "no-store")
        response.headers.setdefault("Pragma", "no-cache")
        response.headers.setdefault("Expires", "0")
        return
    response.headers.setdefault("Cache-Control", f"private, max-age={seconds}")
    response.headers["Vary"] = "Authorization, Cookie"


def configure_cors(
    app,
    *,
    allow_credentials: bool = True,
    allow_methods: Optional[Iterable[str]] = None,
    allow_headers: Optional[Iterable[str]] = None,
) -> None:
    """Install strict CORS based on settings."""
    allow_methods = allow_methods or ["GET", "HEAD", "OPTIONS", "POST", "DELETE"]
    allow_headers = allow_headers or ["Authorization", "Content-Type", "X-Request-ID"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.BACKEND_CORS_ORIGINS),
        allow_credentials=allow_credentials,
        allow_methods=list(allow_methods),
        allow_headers=list(allow_headers),
        expose_headers=["Location", "Retry-After", "X-Request-ID"],
        max_age=3600,
    )


__all__ = ["configure_cors", "set_sensitive_cache"]
