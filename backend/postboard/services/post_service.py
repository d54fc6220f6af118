"""
PostBoard Backend - Post Service
=================================

What:  Create, soft-delete, fetch and list posts.
Who:   Called by the /posts route handlers.

Soft delete:
    delete_post() sets deleted_at; the row and its content stay. Every
    default query then skips the post (see models/mixins.py). Its comments
    are left untouched and remain reachable through the comment endpoints.

Delete flow (one transaction):
    SELECT post FOR UPDATE (live posts only)
      → None            NotFoundError (missing, or already deleted)
      → other owner     ForbiddenError, nothing written
      → owner           deleted_at = now, flush

    The row lock makes a concurrent delete of the same post wait; once it
    proceeds the post is no longer live and it gets NotFoundError.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from postboard.exceptions import DatabaseError, NotFoundError
from postboard.models import Comment, Post
from postboard.models.mixins import utcnow
from postboard.schemas.common import MessageResponse
from postboard.schemas.post import (
    PostCommentCount,
    PostCreateRequest,
    PostDetails,
    PostResponse,
)
from postboard.services.authorization import authorize_owner

logger = logging.getLogger(__name__)


class PostService:
    """Business logic for posts. Stateless; receives the request session."""

    async def create_post(self, db: AsyncSession, payload: PostCreateRequest) -> PostResponse:
        """
        Persist a post as given.

        The owning user is not looked up here; the posts.user_id foreign key
        rejects an unknown user and that surfaces as DatabaseError (500).
        """
        post = Post(title=payload.title, content=payload.content, user_id=payload.user_id)
        db.add(post)
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating post for user %s: %s", payload.user_id, str(e))
            raise DatabaseError(
                context={"user_id": payload.user_id, "original_error": type(e).__name__},
            )

        logger.info("Post %s created by user %s", post.id, post.user_id)
        return PostResponse.model_validate(post)

    async def get_post(
        self,
        db: AsyncSession,
        post_id: int,
        include_deleted: bool = False,
    ) -> PostResponse:
        """
        Direct id lookup.

        Args:
            include_deleted: Also return a soft-deleted post (deletedAt set)

        Raises:
            NotFoundError: No such post, or soft-deleted and include_deleted is False
        """
        post = await self._load_post(db, post_id, include_deleted=include_deleted)
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)
        return PostResponse.model_validate(post)

    async def delete_post(self, db: AsyncSession, post_id: int, requester_id: int) -> MessageResponse:
        """
        Soft-delete a post on behalf of its owner.

        Raises:
            NotFoundError:  Post missing or already deleted (→ 404)
            ForbiddenError: requester_id is not the post's user_id (→ 403)
        """
        post = await self._load_post(db, post_id, for_update=True)
        if post is None:
            raise NotFoundError(resource="post", resource_id=post_id)

        authorize_owner(post, requester_id, "post")

        post.deleted_at = utcnow()
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error soft-deleting post %s: %s", post_id, str(e))
            raise DatabaseError(
                context={"post_id": post_id, "original_error": type(e).__name__},
            )

        logger.info("Post %s soft-deleted by user %s", post_id, requester_id)
        return MessageResponse(message="Post deleted")

    async def list_with_relations(self, db: AsyncSession) -> List[PostDetails]:
        """
        All live posts with their owner and comments, ordered by id.

        Query plan (3 statements, no N+1):
            SELECT posts ...                          (deleted_at IS NULL)
            SELECT users WHERE id IN (...)            (selectinload)
            SELECT comments WHERE post_id IN (...)    (selectinload, ORDER BY id)

        Not paginated: the response grows with the table.
        """
        result = await db.execute(
            select(Post)
            .options(selectinload(Post.user), selectinload(Post.comments))
            .order_by(Post.id)
        )
        return [PostDetails.model_validate(post) for post in result.scalars().all()]

    async def list_with_comment_counts(self, db: AsyncSession) -> List[PostCommentCount]:
        """
        Live posts with the number of comments on each.

        Query plan:
            SELECT posts.id, posts.title, count(comments.id)
            FROM posts LEFT OUTER JOIN comments ON comments.post_id = posts.id
            WHERE posts.deleted_at IS NULL
            GROUP BY posts.id, posts.title

        count(comments.id) ignores the NULL row produced by the outer join,
        so a post without comments reports 0 instead of disappearing.
        """
        stmt = (
            select(
                Post.id,
                Post.title,
                func.count(Comment.id).label("comment_count"),
            )
            .outerjoin(Comment, Comment.post_id == Post.id)
            .where(Post.deleted_at.is_(None))
            .group_by(Post.id, Post.title)
            .order_by(Post.id)
        )
        try:
            rows = (await db.execute(stmt)).all()
        except SQLAlchemyError as e:
            logger.error("Database error counting comments per post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [
            PostCommentCount(id=row.id, title=row.title, comment_count=row.comment_count)
            for row in rows
        ]

    async def _load_post(
        self,
        db: AsyncSession,
        post_id: int,
        include_deleted: bool = False,
        for_update: bool = False,
    ) -> Optional[Post]:
        stmt = select(Post).where(Post.id == post_id)
        if include_deleted:
            stmt = stmt.execution_options(include_deleted=True)
        if for_update:
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        return result.scalar_one_or_none()


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
