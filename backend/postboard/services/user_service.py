"""
PostBoard Backend - User Service
=================================

What:  Signup, upsert and lookups for users.
Who:   Called by the /users route handlers.

Two write paths, on purpose:

    signup()  duplicate-email check → field validation → hash → insert
    upsert()  hash (if a password is given) → insert or update by id.
              NO name/email/password rules. Callers must not assume those
              invariants hold for rows written here.

Both translate a duplicate email into ConflictError: uniqueness is a storage
invariant and is enforced on every path.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.exceptions import ConflictError, DatabaseError, NotFoundError
from postboard.models import User
from postboard.schemas.user import (
    SignupRequest,
    UpsertResponse,
    UserPublic,
    UserResponse,
    UserUpsertRequest,
)
from postboard.security import hash_password
from postboard.validators import validate_new_user

logger = logging.getLogger(__name__)


def _is_email_conflict(error: IntegrityError) -> bool:
    """
    True when the violated constraint is the unique email index.

    PostgreSQL: duplicate key value violates unique constraint "ix_users_email"
    SQLite:     UNIQUE constraint failed: users.email
    A NOT NULL failure on email also names the column, so "unique" is required.
    """
    detail = str(error.orig).lower()
    return "unique" in detail and "email" in detail


class UserService:
    """
    Business logic for user records.

    Stateless; every method receives the request's AsyncSession and only
    flushes. The commit belongs to get_db_session().
    """

    async def signup(self, db: AsyncSession, payload: SignupRequest) -> UserResponse:
        """
        Register a new user.

        Steps:
            1. Reject an email that is already registered (ConflictError)
            2. Validate email syntax, password length, name length, role (ValidationError)
            3. Hash the password and insert the row
            4. Return the created record, including id and role

        Raises:
            ConflictError:   Email already registered (also on a concurrent
                             signup that wins the unique index race)
            ValidationError: A field rule failed; message names the rule
            DatabaseError:   Any other storage failure
        """
        if payload.email and await self._get_by_email(db, payload.email) is not None:
            raise ConflictError("Email already exists", field="email")

        role = validate_new_user(payload.name, payload.email, payload.password, payload.role)

        user = User(
            name=payload.name,
            email=payload.email,
            password=hash_password(payload.password),
            role=role,
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            raise ConflictError("Email already exists", field="email")
        except SQLAlchemyError as e:
            logger.error("Database error during signup: %s", str(e), exc_info=True)
            raise DatabaseError(context={"original_error": type(e).__name__})

        logger.info("User %s signed up (role=%s)", user.id, user.role.value)
        return UserResponse.model_validate(user)

    async def upsert(
        self,
        db: AsyncSession,
        user_id: int,
        payload: UserUpsertRequest,
    ) -> UpsertResponse:
        """
        Insert or update the user with primary key `user_id`, skipping validation.

        Only keys present (and non-null) in the body are written. A new row
        still needs name, email and password; leaving one out is a NOT NULL
        violation reported as DatabaseError (500), the same as any other
        constraint the API does not pre-check.

        Returns:
            UpsertResponse with the stored record and created=True for an insert.

        Raises:
            ConflictError: `email` already belongs to another user, including one
                           that took it between the pre-check and the flush
            DatabaseError: Storage constraint violation or failure
        """
        fields = payload.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in fields:
            owner = await self._get_by_email(db, fields["email"])
            if owner is not None and owner.id != user_id:
                raise ConflictError("Email already exists", field="email")

        if "password" in fields:
            fields["password"] = hash_password(fields["password"])

        user = await db.get(User, user_id)
        created = user is None
        if created:
            user = User(id=user_id)
            db.add(user)

        for key, value in fields.items():
            setattr(user, key, value)

        try:
            await db.flush()
        except IntegrityError as e:
            if "email" in fields and _is_email_conflict(e):
                raise ConflictError("Email already exists", field="email")
            logger.error("Constraint violation during upsert of user %s: %s", user_id, str(e))
            raise DatabaseError(
                context={"user_id": user_id, "original_error": type(e).__name__},
            )
        except SQLAlchemyError as e:
            logger.error("Database error during upsert of user %s: %s", user_id, str(e))
            raise DatabaseError(
                context={"user_id": user_id, "original_error": type(e).__name__},
            )

        logger.info("User %s %s via upsert", user_id, "inserted" if created else "updated")
        return UpsertResponse(user=UserResponse.model_validate(user), created=created)

    async def find_by_email(self, db: AsyncSession, email: str) -> Optional[UserPublic]:
        """Exact-match lookup. Returns None (not an error) when nobody has the email."""
        user = await self._get_by_email(db, email)
        if user is None:
            return None
        return UserPublic.model_validate(user)

    async def find_by_id(self, db: AsyncSession, user_id: int) -> UserPublic:
        """
        Fetch one user without its role.

        Raises:
            NotFoundError: No user with this id (→ 404)
        """
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return UserPublic.model_validate(user)

    async def _get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
