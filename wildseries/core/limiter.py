from __future__ import annotations

"""
Wild Series · HTTP Rate Limiting (SlowAPI)
==========================================

- **User/IP aware** keying: per-user when auth sets `request.state.user_id`,
  else per-client-IP (X-Forwarded-For / X-Real-IP / client.host).
- **Exemptions**: health/docs paths, trusted IPs, and a test bypass switch.
- **Backends**: any `limits` storage URI via `RATELIMIT_STORAGE_URI`
  (memory:// by default).

Environment
-----------
RATE_LIMIT_ENABLED           default: "true"
DEFAULT_RATE_LIMIT           default: "100/minute"
RATELIMIT_STORAGE_URI        default: "memory://"
RATE_LIMIT_SKIP_PATHS        default: "/healthz,/readyz,/docs,/openapi.json"
RATE_LIMIT_TRUSTED_IPS       default: "" (comma separated)
RATE_LIMIT_TEST_BYPASS       default: "" (truthy to bypass in tests/CI)

Usage
-----
    @router.post("/new")
    @rate_limit("10/minute")
    async def create(request: Request, ...): ...
"""

import os
from typing import Callable, List, Optional, Set

from dotenv import load_dotenv
from loguru import logger
from slowapi import Limiter
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request

load_dotenv()

DEFAULT_LIMIT = os.getenv("DEFAULT_RATE_LIMIT", "100/minute").strip()
STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "").strip() or "memory://"

SKIP_PATHS: List[str] = [
    p.strip()
    for p in os.getenv("RATE_LIMIT_SKIP_PATHS", "/healthz,/readyz,/docs,/openapi.json").split(",")
    if p.strip()
]
TRUSTED_IPS: Set[str] = {ip.strip() for ip in os.getenv("RATE_LIMIT_TRUSTED_IPS", "").split(",") if ip.strip()}


def _truthy(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _client_ip(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        ip = xff.split(",")[0].strip()
        if ip:
            return ip
    xri = request.headers.get("x-real-ip")
    if xri:
        return xri.strip()
    return get_remote_address(request) or "unknown"


def get_user_rate_limit_key(request: Request) -> str:
    """`user:<id>` when authenticated, otherwise `ip:<addr>`."""
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{_client_ip(request)}"


def should_exempt_request(request: Optional[Request]) -> bool:
    # Env is re-read per request so tests can toggle without re-importing.
    if not _truthy("RATE_LIMIT_ENABLED", "true"):
        return True
    if _truthy("RATE_LIMIT_TEST_BYPASS"):
        return True
    if request is None:
        return False
    path = request.url.path
    if any(path == p or path.startswith(p.rstrip("/") + "/") for p in SKIP_PATHS):
        return True
    return _client_ip(request) in TRUSTED_IPS


def _build_default_limits() -> List[str]:
    return [chunk.strip() for chunk in DEFAULT_LIMIT.split(",") if chunk.strip()]


def _make_limiter() -> Optional[Limiter]:
    try:
        limiter = Limiter(
            key_func=get_user_rate_limit_key,
            default_limits=_build_default_limits(),
            storage_uri=STORAGE_URI,
        )
    except Exception as e:
        logger.error(f"Failed to init Limiter; limits disabled | err={e}")
        return None
    logger.info("RateLimiter ready | default={} | storage={}", _build_default_limits(), STORAGE_URI)
    return limiter


limiter: Optional[Limiter] = _make_limiter()


def _exempt_when(request: Optional[Request] = None) -> bool:
    """SlowAPI calls this with the request on newer versions, bare on older ones."""
    req = request
    if req is None and limiter is not None:
        try:
            req = limiter._request_context.get()  # type: ignore[attr-defined]
        except LookupError:
            req = None
    return should_exempt_request(req)


def rate_limit(*limits: str) -> Callable:
    """Apply per-route limits with the exemptions above.

    The decorated endpoint must accept a `request: Request` parameter.
    """
    if limiter is None:
        def _noop(fn: Callable) -> Callable:
            return fn
        return _noop

    selected = list(limits) if limits else _build_default_limits()

    def _apply(fn: Callable) -> Callable:
        for limit_value in reversed(selected):
            fn = limiter.limit(limit_value, exempt_when=_exempt_when)(fn)
        return fn

    return _apply


def rate_limit_exempt() -> Callable:
    """Exempt a route from the middleware's default limits.

    The endpoint is registered by name and returned unwrapped, so async
    handlers stay coroutine functions.
    """
    def _mark(fn: Callable) -> Callable:
        if limiter is not None:
            limiter._exempt_routes.add(f"{fn.__module__}.{fn.__name__}")  # type: ignore[attr-defined]
        return fn
    return _mark


def install_rate_limiter(app) -> None:
    """Attach SlowAPI middleware unless disabled by env."""
    if not limiter:
        logger.warning("RateLimiter not initialized; middleware not installed")
        return
    if not _truthy("RATE_LIMIT_ENABLED", "true"):
        logger.info("RateLimiter disabled by env; middleware not installed")
        return
    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)


__all__ = [
    "limiter",
    "rate_limit",
    "rate_limit_exempt",
    "install_rate_limiter",
    "get_user_rate_limit_key",
    "should_exempt_request",
]
