"""
PostBoard Backend - ORM Models
===============================

Importing this package registers every table on Base.metadata and installs
the soft-delete query hook. Relationships reference each other by class name,
so all three models must be imported before the first query configures the
mappers.

Associations:
    User 1 ── * Post      (posts.user_id)
    User 1 ── * Comment   (comments.user_id)
    Post 1 ── * Comment   (comments.post_id)
"""

from postboard.models.mixins import SoftDeleteMixin, TimestampMixin
from postboard.models.user import User, UserRole
from postboard.models.post import Post
from postboard.models.comment import Comment

__all__ = [
    "Comment",
    "Post",
    "SoftDeleteMixin",
    "TimestampMixin",
    "User",
    "UserRole",
]
