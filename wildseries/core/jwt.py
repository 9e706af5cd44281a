# wildseries/core/jwt.py
from __future__ import annotations

"""
Wild Series · JWT helpers
=========================
- `decode_access_token` verifies signature, `exp`/`nbf`/`iat`, requires a
  `jti` and `token_type == "access"`.
- `get_bearer_token` extracts a case-insensitive `Bearer` credential.

Token *creation* lives in `wildseries.core.security`.
"""

from typing import Any, Dict, Optional
import logging

from jose import ExpiredSignatureError, JWTError, jwt
from starlette.requests import Request

from wildseries.core.config import settings
from wildseries.core.exceptions import AuthenticationRequiredException

logger = logging.getLogger("wildseries.auth")


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and validate an access JWT.

    Raises
    ------
    AuthenticationRequiredException
        401 for invalid/expired tokens or a wrong token type.
    """
    try:
        payload: Dict[str, Any] = jwt.decode(
            token,
            settings.JWT_SECRET_KEY.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"verify_aud": False},
        )
    except ExpiredSignatureError:
        raise AuthenticationRequiredException("Token has expired")
    except JWTError:
        logger.debug("Rejected malformed access token")
        raise AuthenticationRequiredException("Invalid token")

    if not payload.get("jti"):
        raise AuthenticationRequiredException("Invalid token: missing jti")
    if payload.get("token_type") != "access":
        raise AuthenticationRequiredException("Invalid token type")
    return payload


def get_bearer_token(request: Request) -> Optional[str]:
    """Return the bearer credential from `Authorization`, or None when absent."""
    auth = request.headers.get("authorization") or ""
    scheme, _, credentials = auth.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()


__all__ = ["decode_access_token", "get_bearer_token"]
