from __future__ import annotations

"""
Per-entity CSRF tokens for delete actions.

A token is bound to an *intention* string such as ``delete<entity id>``:

    token = HMAC-SHA256(CSRF_SECRET, intention).hexdigest()

Read endpoints expose the expected token as ``delete_token``; delete
endpoints compare the submitted ``_token`` form field in constant time.
"""

import hashlib
import hmac
from typing import Optional
from uuid import UUID

from wildseries.core.config import settings


def delete_intention(entity_id: UUID | str) -> str:
    return f"delete{entity_id}"


def generate_csrf_token(intention: str) -> str:
    secret = settings.CSRF_SECRET.get_secret_value().encode("utf-8")
    return hmac.new(secret, intention.encode("utf-8"), hashlib.sha256).hexdigest()


def is_csrf_token_valid(intention: str, token: Optional[str]) -> bool:
    """Constant-time check of a submitted token; missing tokens are invalid."""
    if not token:
        return False
    return hmac.compare_digest(generate_csrf_token(intention), token)


def delete_token_for(entity_id: UUID | str) -> str:
    return generate_csrf_token(delete_intention(entity_id))


__all__ = [
    "delete_intention",
    "generate_csrf_token",
    "is_csrf_token_valid",
    "delete_token_for",
]
