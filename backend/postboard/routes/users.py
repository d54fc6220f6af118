"""
PostBoard Backend - User Route Handlers
========================================

What:  /users endpoints: signup, upsert, lookup by email, lookup by id.
How:   Parse path/query/body, delegate to UserService, return the schema.

Route order matters: /users/by-email is declared before /users/{user_id} so
the literal path is not captured by the integer parameter.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.schemas.common import ErrorResponse
from postboard.schemas.user import (
    SignupRequest,
    UpsertResponse,
    UserPublic,
    UserResponse,
    UserUpsertRequest,
)
from postboard.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/signup",
    response_model=UserResponse,
    responses={
        400: {"description": "Duplicate email or invalid field", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """
    Create a user after checking email uniqueness, email syntax, password
    length (> 6) and name length (> 2). Role defaults to "user".
    """
    return await user_service.signup(db, payload)


@router.put(
    "/{user_id}",
    response_model=UpsertResponse,
    responses={
        400: {"description": "Email owned by another user", "model": ErrorResponse},
    },
    summary="Insert or update a user without validation",
    description=(
        "Writes the given fields to the user with this id, creating it if needed. "
        "Name, email and password rules are NOT applied on this path."
    ),
)
async def upsert_user(
    payload: UserUpsertRequest,
    user_id: int = Path(ge=1),
    db: AsyncSession = Depends(get_db_session),
) -> UpsertResponse:
    return await user_service.upsert(db, user_id, payload)


@router.get(
    "/by-email",
    response_model=Optional[UserPublic],
    summary="Find a user by exact email",
    description="Returns the user, or null when no user has this email.",
)
async def find_by_email(
    email: str = Query(description="Exact email address to look up"),
    db: AsyncSession = Depends(get_db_session),
) -> Optional[UserPublic]:
    return await user_service.find_by_email(db, email)


@router.get(
    "/{user_id}",
    response_model=UserPublic,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Get a user by id (role omitted)",
)
async def find_by_id(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> UserPublic:
    return await user_service.find_by_id(db, user_id)
