"""
PostBoard Backend - User Schemas
=================================

Projections (what each endpoint may reveal):

    UserResponse  id, name, email, role, timestamps
                  → signup and upsert (the caller's own write)
    UserPublic    id, name, email, timestamps (no role)
                  → GET /users/{id}, GET /users/by-email, comment details
    UserBrief     id, name
                  → embedded in GET /posts/details

The password hash is in none of them.

Request bodies are permissive on purpose: signup fields are Optional plain
strings so that a missing name/email/password or an unknown role reaches the
validators and comes back as a 400 ValidationError with a readable message,
not a 422 schema error.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from postboard.models.user import UserRole
from postboard.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SignupRequest(CamelModel):
    """Body of POST /users/signup. Rules are applied by the service."""
    name: Optional[str] = Field(default=None, description="Display name (more than 2 characters)")
    email: Optional[str] = Field(default=None, description="Unique, valid email address")
    password: Optional[str] = Field(default=None, description="Plaintext password (more than 6 characters)")
    role: Optional[str] = Field(default=None, description="user (default) or admin")


class UserUpsertRequest(CamelModel):
    """
    Body of PUT /users/{id}.

    Only the keys present in the body are written (exclude_unset). No length
    or email-format rules are applied to these values.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserBrief(CamelModel):
    id: int
    name: str


class UserPublic(CamelModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class UserResponse(UserPublic):
    role: UserRole


class UpsertResponse(CamelModel):
    user: UserResponse
    created: bool = Field(description="True when the upsert inserted a new row")
