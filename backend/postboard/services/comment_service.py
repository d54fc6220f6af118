"""
PostBoard Backend - Comment Service
====================================

What:  Bulk create, update, find-or-create, search and read comments.
Who:   Called by the /comments route handlers.

Reference check:
    Before inserting, every userId must name an existing user and every
    postId a live (not soft-deleted) post. One bad reference rejects the whole
    batch with ValidationError and nothing is written. Combined with the
    per-request transaction this makes bulk_create all-or-nothing.

Known gap:
    find_or_create() has no unique constraint to lean on; two concurrent
    calls with the same fields can both insert.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from postboard.config import settings
from postboard.exceptions import DatabaseError, NotFoundError, ValidationError
from postboard.models import Comment, Post, User
from postboard.schemas.comment import (
    CommentCreateRequest,
    CommentDetails,
    CommentResponse,
    CommentSearchResponse,
    FindOrCreateResponse,
)
from postboard.services.authorization import authorize_owner

logger = logging.getLogger(__name__)


class CommentService:
    """Business logic for comments. Stateless; receives the request session."""

    async def bulk_create(
        self,
        db: AsyncSession,
        records: List[CommentCreateRequest],
    ) -> List[CommentResponse]:
        """
        Insert a batch of comments in one flush.

        Raises:
            ValidationError: A record references a missing user or post; the
                             batch is rejected before any insert
            DatabaseError:   Storage failure; the request transaction rolls
                             back every row of the batch
        """
        if not records:
            return []

        await self._ensure_references_exist(
            db,
            user_ids={record.user_id for record in records},
            post_ids={record.post_id for record in records},
        )

        comments = [
            Comment(content=record.content, post_id=record.post_id, user_id=record.user_id)
            for record in records
        ]
        db.add_all(comments)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error in bulk comment insert: %s", str(e), exc_info=True)
            raise DatabaseError(
                context={"batch_size": len(records), "original_error": type(e).__name__},
            )

        logger.info("Created %d comments", len(comments))
        return [CommentResponse.model_validate(comment) for comment in comments]

    async def update_comment(
        self,
        db: AsyncSession,
        comment_id: int,
        requester_id: int,
        content: str,
    ) -> CommentResponse:
        """
        Overwrite a comment's content on behalf of its owner.

        The row is read FOR UPDATE so ownership cannot change before the write.

        Raises:
            NotFoundError:  No comment with this id (→ 404)
            ForbiddenError: requester_id does not own the comment (→ 403)
        """
        result = await db.execute(
            select(Comment).where(Comment.id == comment_id).with_for_update()
        )
        comment = result.scalar_one_or_none()
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)

        authorize_owner(comment, requester_id, "comment")

        comment.content = content
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating comment %s: %s", comment_id, str(e))
            raise DatabaseError(
                context={"comment_id": comment_id, "original_error": type(e).__name__},
            )

        logger.info("Comment %s updated by user %s", comment_id, requester_id)
        return CommentResponse.model_validate(comment)

    async def find_or_create(
        self,
        db: AsyncSession,
        match: CommentCreateRequest,
    ) -> FindOrCreateResponse:
        """
        Return the first comment matching content, postId and userId exactly,
        creating it when none exists.

        Raises:
            ValidationError: Nothing matched and the referenced user or post
                             does not exist
        """
        result = await db.execute(
            select(Comment)
            .where(
                Comment.content == match.content,
                Comment.post_id == match.post_id,
                Comment.user_id == match.user_id,
            )
            .order_by(Comment.id)
            .limit(1)
        )
        comment = result.scalar_one_or_none()
        if comment is not None:
            return FindOrCreateResponse(
                comment=CommentResponse.model_validate(comment),
                created=False,
            )

        created = await self.bulk_create(db, [match])
        return FindOrCreateResponse(comment=created[0], created=True)

    async def search(self, db: AsyncSession, word: str) -> CommentSearchResponse:
        """
        Comments whose content contains `word`.

        `%` and `_` in the word match literally (LIKE with escaping). Case
        sensitivity is whatever the database collation does: PostgreSQL LIKE
        is case-sensitive, SQLite LIKE is not for ASCII.
        """
        result = await db.execute(
            select(Comment)
            .where(Comment.content.contains(word, autoescape=True))
            .order_by(Comment.id)
        )
        rows = [CommentResponse.model_validate(comment) for comment in result.scalars().all()]
        return CommentSearchResponse(count=len(rows), rows=rows)

    async def newest_for_post(
        self,
        db: AsyncSession,
        post_id: int,
        limit: Optional[int] = None,
    ) -> List[CommentResponse]:
        """
        The most recent comments of a post, newest first.

        Ordered by created_at DESC, then id DESC, so comments created within
        the same timestamp still come back in a stable order (latest insert
        first).

        Args:
            limit: Max rows; defaults to settings.newest_comments_limit (3)
        """
        if limit is None:
            limit = settings.newest_comments_limit
        result = await db.execute(
            select(Comment)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
        )
        return [CommentResponse.model_validate(comment) for comment in result.scalars().all()]

    async def get_with_relations(self, db: AsyncSession, comment_id: int) -> CommentDetails:
        """
        One comment with its author (no role) and parent post.

        The post is None when it has been soft-deleted.

        Raises:
            NotFoundError: No comment with this id (→ 404)
        """
        result = await db.execute(
            select(Comment)
            .where(Comment.id == comment_id)
            .options(selectinload(Comment.user), selectinload(Comment.post))
        )
        comment = result.scalar_one_or_none()
        if comment is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return CommentDetails.model_validate(comment)

    async def _ensure_references_exist(
        self,
        db: AsyncSession,
        user_ids: Iterable[int],
        post_ids: Iterable[int],
    ) -> None:
        """Raise ValidationError listing every missing user and live post id."""
        user_ids = set(user_ids)
        post_ids = set(post_ids)

        found_users = set(
            (await db.execute(select(User.id).where(User.id.in_(user_ids)))).scalars().all()
        )
        found_posts = set(
            (
                await db.execute(
                    select(Post.id).where(Post.id.in_(post_ids), Post.deleted_at.is_(None))
                )
            ).scalars().all()
        )

        missing_users = sorted(user_ids - found_users)
        missing_posts = sorted(post_ids - found_posts)
        if not missing_users and not missing_posts:
            return

        problems = []
        if missing_users:
            problems.append(f"unknown userId {', '.join(map(str, missing_users))}")
        if missing_posts:
            problems.append(f"unknown postId {', '.join(map(str, missing_posts))}")
        raise ValidationError(
            "Comment references do not exist: " + "; ".join(problems),
            context={"missing_user_ids": missing_users, "missing_post_ids": missing_posts},
        )


# ── Singleton Instance ────────────────────────────────────────────────────
comment_service = CommentService()
