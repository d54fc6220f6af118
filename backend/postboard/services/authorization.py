"""
PostBoard Backend - Ownership Check
====================================

What:  The single authorization rule of the API: only the owner of a post or
       comment may mutate it.
How:   Compares the record's user_id with the requester id from the body.
Who:   PostService.delete_post() and CommentService.update_comment().

Callers load the record with SELECT ... FOR UPDATE before calling this, so
the owner cannot change between the check and the write.
"""

import logging
from typing import Union

from postboard.exceptions import ForbiddenError
from postboard.models import Comment, Post

logger = logging.getLogger(__name__)

OwnedResource = Union[Post, Comment]


def authorize_owner(resource: OwnedResource, requester_id: int, resource_name: str) -> None:
    """
    Raise ForbiddenError unless `requester_id` owns `resource`.

    Args:
        resource:      Loaded Post or Comment
        requester_id:  userId sent by the client
        resource_name: "post" or "comment", used in the error message
    """
    if resource.user_id != requester_id:
        logger.warning(
            "Ownership check failed: user %s tried to modify %s %s owned by user %s",
            requester_id,
            resource_name,
            resource.id,
            resource.user_id,
        )
        raise ForbiddenError(resource=resource_name, resource_id=resource.id)
