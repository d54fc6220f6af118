"""
PostBoard Backend - Shared Pydantic Schemas
============================================

What:  Base model and cross-resource response models.

CamelModel:
    Python attributes stay snake_case (user_id) while the JSON contract is
    camelCase (userId). FastAPI serializes response_model output by alias,
    and request bodies accept either spelling (populate_by_name).
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for every request/response schema in the API."""

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class MessageResponse(CamelModel):
    """Plain confirmation returned by mutations with no record to echo."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for all API errors.

    Example:
        {
            "error": "forbidden",
            "message": "You are not allowed to modify this post",
            "details": {"resource": "post", "resource_id": 7},
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for load balancer and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
