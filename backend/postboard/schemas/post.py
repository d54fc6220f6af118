"""
PostBoard Backend - Post Schemas
=================================

The projected columns of the two listing endpoints are part of the API
contract:

    GET /posts/details        {id, title, user: {id, name}, comments: [{id, content}]}
    GET /posts/comment-count  {id, title, commentCount}
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from postboard.schemas.common import CamelModel
from postboard.schemas.user import UserBrief


class PostCreateRequest(CamelModel):
    title: str
    content: str
    user_id: int = Field(description="Owning user id")


class PostDeleteRequest(CamelModel):
    user_id: int = Field(description="Id of the user requesting the delete; must own the post")


class PostResponse(CamelModel):
    id: int
    title: str
    content: str
    user_id: int
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = Field(
        default=None,
        description="Soft-delete timestamp; null while the post is live",
    )


class CommentBrief(CamelModel):
    id: int
    content: str


class PostDetails(CamelModel):
    id: int
    title: str
    user: Optional[UserBrief] = None
    comments: List[CommentBrief] = Field(default_factory=list)


class PostCommentCount(CamelModel):
    id: int
    title: str
    comment_count: int = Field(description="Number of comments on the post (0 when none)")
