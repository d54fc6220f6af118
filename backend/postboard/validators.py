"""
PostBoard Backend - Field Validators
=====================================

What:  Record-level rules checked before a validated write.
How:   Plain functions that raise ValidationError with the failing field.
Who:   UserService.signup(). UserService.upsert() deliberately does not call
       these (documented bypass).

Rules:
    email     syntactically valid address (no DNS/deliverability lookup)
    password  more than 6 characters
    name      more than 2 characters
    role      "user" or "admin" when given (defaults to "user")

validate_new_user() checks in that order and reports the first failure, so a
request with several bad fields always gets the same message.
"""

from typing import Optional

from email_validator import EmailNotValidError, validate_email as _check_email_syntax

from postboard.exceptions import ValidationError
from postboard.models.user import UserRole

NAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 7


def validate_email(email: Optional[str]) -> str:
    if not email:
        raise ValidationError("Email is required", field="email")
    try:
        _check_email_syntax(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError(
            "Email must be a valid email address",
            field="email",
            context={"reason": str(e)},
        )
    return email


def validate_password(password: Optional[str]) -> str:
    if password is None or len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError("Password must be more than 6 characters", field="password")
    return password


def validate_name(name: Optional[str]) -> str:
    if name is None or len(name) < NAME_MIN_LENGTH:
        raise ValidationError("Name must be longer than 2 characters", field="name")
    return name


def validate_role(role: Optional[str]) -> UserRole:
    """Map the requested role to UserRole; no role means a regular user."""
    if role is None:
        return UserRole.user
    try:
        return UserRole(role)
    except ValueError:
        allowed = ", ".join(r.value for r in UserRole)
        raise ValidationError(
            f"Role must be one of: {allowed}",
            field="role",
            context={"allowed": [r.value for r in UserRole]},
        )


def validate_new_user(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    role: Optional[str] = None,
) -> UserRole:
    """
    Run every signup rule; raises ValidationError on the first violation.

    Returns the role to store.
    """
    validate_email(email)
    validate_password(password)
    validate_name(name)
    return validate_role(role)
