"""
PostBoard Backend - Shared Model Columns
=========================================

What:  Column mixins shared by the ORM models, plus the global soft-delete filter.

TimestampMixin:
    created_at / updated_at on every table. Values are produced in Python
    (UTC, microsecond precision) so the instance carries them right after
    flush(); no refresh round-trip is needed before serialization.

SoftDeleteMixin:
    deleted_at marker. NULL means live. A session-wide `do_orm_execute` hook
    adds `deleted_at IS NULL` to every ORM SELECT that touches a soft-deletable
    entity, including relationship loads (selectinload) and joins. A query can
    opt out with `.execution_options(include_deleted=True)`.

    Only the soft-deletable entity itself is hidden. Rows that reference it
    (comments of a deleted post) are not filtered; they are still returned by
    their own queries, and their relationship to the deleted parent loads as
    None.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, event
from sqlalchemy.orm import (
    Mapped,
    ORMExecuteState,
    Session,
    mapped_column,
    with_loader_criteria,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Adds created_at / updated_at columns maintained on insert and update."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


class SoftDeleteMixin:
    """Adds a nullable deleted_at marker honored by all default reads."""

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


@event.listens_for(Session, "do_orm_execute")
def _exclude_soft_deleted(execute_state: ORMExecuteState) -> None:
    """
    Attach the `deleted_at IS NULL` criteria to ORM SELECTs.

    Column refreshes are skipped: they reload attributes of an object that is
    already in the session and must not turn into "row vanished" errors.
    """
    if (
        execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.execution_options.get("include_deleted", False)
    ):
        execute_state.statement = execute_state.statement.options(
            with_loader_criteria(
                SoftDeleteMixin,
                lambda cls: cls.deleted_at.is_(None),
                include_aliases=True,
            )
        )
