"""
PostBoard Backend - Post Route Handlers
========================================

What:  /posts endpoints: create, soft delete, detail listing, comment counts,
       direct lookup.

Route order matters: /posts/details and /posts/comment-count are declared
before /posts/{post_id}.
"""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.schemas.common import ErrorResponse, MessageResponse
from postboard.schemas.post import (
    PostCommentCount,
    PostCreateRequest,
    PostDeleteRequest,
    PostDetails,
    PostResponse,
)
from postboard.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post(
    "",
    response_model=PostResponse,
    responses={500: {"description": "Unknown userId or storage failure", "model": ErrorResponse}},
    summary="Create a post",
)
async def create_post(
    payload: PostCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create_post(db, payload)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    responses={
        403: {"description": "Requester does not own the post", "model": ErrorResponse},
        404: {"description": "Post not found or already deleted", "model": ErrorResponse},
    },
    summary="Soft-delete a post (owner only)",
)
async def delete_post(
    post_id: int,
    payload: PostDeleteRequest = Body(),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    Marks the post deleted when body.userId owns it. The row is kept; the post
    disappears from /posts/details and /posts/comment-count.
    """
    return await post_service.delete_post(db, post_id, payload.user_id)


@router.get(
    "/details",
    response_model=List[PostDetails],
    summary="Posts with their author and comments",
)
async def list_post_details(
    db: AsyncSession = Depends(get_db_session),
) -> List[PostDetails]:
    return await post_service.list_with_relations(db)


@router.get(
    "/comment-count",
    response_model=List[PostCommentCount],
    summary="Posts with their number of comments",
)
async def list_comment_counts(
    db: AsyncSession = Depends(get_db_session),
) -> List[PostCommentCount]:
    return await post_service.list_with_comment_counts(db)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Get a post by id",
)
async def get_post(
    post_id: int,
    include_deleted: bool = Query(
        default=False,
        alias="includeDeleted",
        description="Also return the post if it has been soft-deleted",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.get_post(db, post_id, include_deleted=include_deleted)
