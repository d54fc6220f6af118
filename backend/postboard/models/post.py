"""
PostBoard Backend - Post SQLAlchemy Model
==========================================

What:  ORM model for the `posts` table.
How:   Soft-deletable (see models/mixins.py); a deleted post keeps its row and
       content but disappears from every default query.

Query Patterns:
    - Details listing: posts + owner (id, name) + comments (id, content)
      → selectinload on Post.user and Post.comments, 3 queries total
    - Comment counts: posts LEFT OUTER JOIN comments GROUP BY posts.id
    - Delete: SELECT ... FOR UPDATE on the live post, then SET deleted_at
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base
from postboard.models.mixins import SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from postboard.models.comment import Comment
    from postboard.models.user import User


class Post(SoftDeleteMixin, TimestampMixin, Base):
    """A blog post owned by exactly one user."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    # ── Associations ──────────────────────────────────────────────────────
    user: Mapped["User"] = relationship(back_populates="posts", lazy="raise")
    comments: Mapped[List["Comment"]] = relationship(
        back_populates="post",
        lazy="raise",
        order_by="Comment.id",
    )

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, user_id={self.user_id}, "
            f"deleted_at={self.deleted_at})>"
        )
