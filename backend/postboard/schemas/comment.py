"""
PostBoard Backend - Comment Schemas
====================================
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from postboard.schemas.common import CamelModel
from postboard.schemas.post import PostResponse
from postboard.schemas.user import UserPublic


class CommentCreateRequest(CamelModel):
    """One record of a POST /comments batch, also the find-or-create match."""
    content: str
    post_id: int
    user_id: int


class CommentUpdateRequest(CamelModel):
    user_id: int = Field(description="Id of the user requesting the update; must own the comment")
    content: str


class CommentResponse(CamelModel):
    id: int
    content: str
    post_id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class FindOrCreateResponse(CamelModel):
    comment: CommentResponse
    created: bool = Field(description="True when no matching comment existed")


class CommentSearchResponse(CamelModel):
    count: int = Field(description="Number of matching comments (always len(rows))")
    rows: List[CommentResponse]


class CommentDetails(CommentResponse):
    user: Optional[UserPublic] = None
    post: Optional[PostResponse] = Field(
        default=None,
        description="Parent post; null when the post has been soft-deleted",
    )
