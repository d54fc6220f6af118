"""
PostBoard Backend - User SQLAlchemy Model
==========================================

What:  ORM model for the `users` table.
Who:   Used by UserService and, through relationships, by post/comment joins.

Column notes:
    - email: unique index; uniqueness is also pre-checked by the service so
      the common duplicate case becomes a ConflictError instead of a raw
      IntegrityError
    - password: bcrypt hash produced by postboard.security, never plaintext
    - role: 'user' | 'admin', default 'user'

Field-length and email-syntax rules are NOT enforced here (no @validates):
they live in postboard.validators and are invoked by the signup path only,
so the upsert path can store any value.
"""

import enum
from typing import List, TYPE_CHECKING

from sqlalchemy import Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.database import Base
from postboard.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from postboard.models.comment import Comment
    from postboard.models.post import Post


class UserRole(str, enum.Enum):
    user = "user"
    admin = "admin"


class User(TimestampMixin, Base):
    """
    A registered author.

    Lifecycle:
        1. Created by signup (validated) or upsert (not validated)
        2. Updated only through upsert
        3. Never deleted, never soft-deleted
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.user,
    )

    # ── Associations ──────────────────────────────────────────────────────
    # lazy="raise": every relationship read must be requested explicitly with
    # selectinload(); an implicit lazy load would block inside async code
    posts: Mapped[List["Post"]] = relationship(back_populates="user", lazy="raise")
    comments: Mapped[List["Comment"]] = relationship(back_populates="user", lazy="raise")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
