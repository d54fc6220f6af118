"""
PostBoard Backend - Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for each failure the API can report.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) map them to JSON
       error responses with the matching HTTP status code.
Who:   Raised by services and validators; caught by the global handlers.

Exception Hierarchy:
    PostBoardError (base)
    ├── ValidationError   → 400 Bad Request (bad field values)
    ├── ConflictError     → 400 Bad Request (duplicate unique field)
    ├── ForbiddenError    → 403 Forbidden (ownership mismatch)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PostBoardError(Exception):
    """
    Base exception for all PostBoard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; returned only for 4xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostBoardError):
    """
    Raised when a field value breaks a record invariant.

    When:    Name too short, password too short, malformed email, or a
             comment referencing a user/post that does not exist.
    HTTP:    400 Bad Request

    Shape errors (missing keys, wrong JSON types) never get here: FastAPI
    rejects them with 422 before the service runs.

    Example response:
        {
            "error": "validation_error",
            "message": "Password must be more than 6 characters",
            "details": {"field": "password"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConflictError(PostBoardError):
    """
    Raised when a write would duplicate a unique field.

    When:    Signup or upsert with an email another user already owns.
    HTTP:    400 Bad Request (the API reports duplicates as a client error,
             not 409)
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ForbiddenError(PostBoardError):
    """
    Raised when the requester does not own the resource being mutated.

    When:    DELETE /posts/{id} or PATCH /comments/{id} with a body.userId
             different from the record's userId.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"You are not allowed to modify this {resource}"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class NotFoundError(PostBoardError):
    """
    Raised when a record referenced by id does not exist.

    When:    GET /users/{id}, DELETE /posts/{id}, PATCH /comments/{id}, ...
             with an unknown id (soft-deleted posts count as missing).
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; services convert that None into
    this exception so handlers never dereference a missing record.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(PostBoardError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Connection lost, statement timeout, foreign key violation that
             was not pre-checked, etc.
    HTTP:    500 Internal Server Error

    The client only ever sees a generic message; the original error type is
    kept in context and logged server-side.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
