# wildseries/core/exceptions.py
from __future__ import annotations

"""
Wild Series · Application Exceptions
====================================
A small, consistent layer on top of FastAPI/Starlette's `HTTPException` that
lets us attach structured metadata and render it through the problem+json
handlers in `wildseries.core.exception_handlers`.

Taxonomy
--------
- `NotFoundException`            404  unresolvable route entity / parent chain
- `AccessDeniedException`        403  non-owner edit
- `AuthenticationRequiredException` 401  missing or invalid bearer token
- `ConflictException`            409  duplicate registration

Validation errors are Pydantic's `RequestValidationError` (422). CSRF failures
on delete never raise; see `wildseries.core.csrf`.

Usage
-----
    raise NotFoundException("Program")
    raise AccessDeniedException("Only the owner can edit the program!")
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

__all__ = [
    "AppException",
    "NotFoundException",
    "AccessDeniedException",
    "AuthenticationRequiredException",
    "ConflictException",
]


class AppException(HTTPException):
    """Base application-level exception with optional metadata.

    Attributes
    -----------
    status_code : int
        HTTP status code.
    message : str
        Human-readable error message (serialized as `detail` as well).
    code : int
        Optional internal error code. Defaults to `status_code`.
    details : Any
        Machine-readable details (ids, field names).
    """

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        code: Optional[int] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code: int = int(code or status_code)
        self.message: str = message
        self.details: Optional[Any] = details

    def to_problem(self) -> Dict[str, Any]:
        """Extra members merged into the problem+json body."""
        body: Dict[str, Any] = {"code": self.code}
        if self.details is not None:
            body["details"] = self.details
        return body


class NotFoundException(AppException):
    """Raised when a route entity (or its parent chain) does not resolve."""

    def __init__(self, entity: str, *, details: Optional[Any] = None) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            message=f"{entity} not found",
            details=details,
        )


class AccessDeniedException(AppException):
    """Raised when an authenticated user may not act on a resource."""

    def __init__(self, message: str = "Access denied", *, details: Optional[Any] = None) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            message=message,
            details=details,
        )


class AuthenticationRequiredException(AppException):
    """Raised for anonymous callers on authenticated routes (401)."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ConflictException(AppException):
    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            message=message,
            details=details,
        )
