# wildseries/services/authorization.py
"""Ownership checks run before any edit submission is read."""

from __future__ import annotations

from wildseries.core.exceptions import AccessDeniedException
from wildseries.db.models.comment import Comment
from wildseries.db.models.program import Program
from wildseries.db.models.user import User

PROGRAM_OWNER_MESSAGE = "Only the owner can edit the program!"
COMMENT_AUTHOR_MESSAGE = "Only the author can edit the comment!"


def ensure_program_owner(user: User, program: Program) -> None:
    """403 unless `user` owns `program`. Programs without an owner are not editable."""
    if program.owner_id is None or program.owner_id != user.id:
        raise AccessDeniedException(PROGRAM_OWNER_MESSAGE)


def ensure_comment_author(user: User, comment: Comment) -> None:
    if comment.author_id != user.id:
        raise AccessDeniedException(COMMENT_AUTHOR_MESSAGE)


__all__ = [
    "PROGRAM_OWNER_MESSAGE",
    "COMMENT_AUTHOR_MESSAGE",
    "ensure_program_owner",
    "ensure_comment_author",
]
