"""
PostBoard Backend - Comment Route Handlers
===========================================

What:  /comments endpoints: bulk create, owner-only update, find-or-create,
       substring search, newest per post, detail with relations.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.schemas.comment import (
    CommentCreateRequest,
    CommentDetails,
    CommentResponse,
    CommentSearchResponse,
    CommentUpdateRequest,
    FindOrCreateResponse,
)
from postboard.schemas.common import ErrorResponse
from postboard.services.comment_service import comment_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.post(
    "",
    response_model=List[CommentResponse],
    responses={
        400: {"description": "A record references a missing user or post", "model": ErrorResponse},
    },
    summary="Create several comments at once (all-or-nothing)",
)
async def bulk_create_comments(
    payload: List[CommentCreateRequest],
    db: AsyncSession = Depends(get_db_session),
) -> List[CommentResponse]:
    return await comment_service.bulk_create(db, payload)


@router.patch(
    "/{comment_id}",
    response_model=CommentResponse,
    responses={
        403: {"description": "Requester does not own the comment", "model": ErrorResponse},
        404: {"description": "Comment not found", "model": ErrorResponse},
    },
    summary="Update a comment's content (owner only)",
)
async def update_comment(
    comment_id: int,
    payload: CommentUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    return await comment_service.update_comment(db, comment_id, payload.user_id, payload.content)


@router.post(
    "/find-or-create",
    response_model=FindOrCreateResponse,
    responses={
        400: {"description": "Referenced user or post does not exist", "model": ErrorResponse},
    },
    summary="Return the matching comment, creating it if absent",
)
async def find_or_create_comment(
    payload: CommentCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> FindOrCreateResponse:
    return await comment_service.find_or_create(db, payload)


@router.get(
    "/search",
    response_model=CommentSearchResponse,
    summary="Search comments by substring",
)
async def search_comments(
    word: str = Query(description="Substring to look for in comment content"),
    db: AsyncSession = Depends(get_db_session),
) -> CommentSearchResponse:
    return await comment_service.search(db, word)


@router.get(
    "/newest/{post_id}",
    response_model=List[CommentResponse],
    summary="Latest comments of a post, newest first",
)
async def newest_comments(
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[CommentResponse]:
    return await comment_service.newest_for_post(db, post_id)


@router.get(
    "/details/{comment_id}",
    response_model=CommentDetails,
    responses={404: {"description": "Comment not found", "model": ErrorResponse}},
    summary="A comment with its author and post",
)
async def comment_details(
    comment_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> CommentDetails:
    return await comment_service.get_with_relations(db, comment_id)
