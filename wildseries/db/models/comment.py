# wildseries/db/models/comment.py
from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Index, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from wildseries.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Comment(UUIDPKMixin, TimestampMixin, Base):
    """A user's comment on an episode. Only the author may edit it."""

    __tablename__ = "comments"

    episode_id = Column(
        UUID(as_uuid=True),
        ForeignKey("episodes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id = Column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    comment = Column(Text, nullable=False, doc="Comment body.")

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_comments_episode_created", "episode_id", "created_at"),
    )

    episode = relationship("Episode", back_populates="comments", lazy="raise")
    author = relationship("User", back_populates="comments", lazy="raise")
