"""
PostBoard Backend - Comment SQLAlchemy Model
=============================================

What:  ORM model for the `comments` table. Hard-deleted only.

Indexes:
    idx_comments_post_created: (post_id, created_at, id), scanned backwards by
    the "newest comments of a post" query, which orders by creation time with
    id as the tie breaker.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base
from postboard.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from postboard.models.post import Post
    from postboard.models.user import User


class Comment(TimestampMixin, Base):
    """A comment written by one user on one post."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id"),
        nullable=False,
        index=True,
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    # ── Associations ──────────────────────────────────────────────────────
    # `post` loads as None when the parent post is soft-deleted
    post: Mapped["Post"] = relationship(back_populates="comments", lazy="raise")
    user: Mapped["User"] = relationship(back_populates="comments", lazy="raise")

    __table_args__ = (
        Index("idx_comments_post_created", "post_id", "created_at", "id"),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, post_id={self.post_id}, user_id={self.user_id})>"
