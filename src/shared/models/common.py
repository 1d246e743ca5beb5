"""Common types used across all models."""

from typing import Any

from pydantic import Field

from .base import CloudPulseBaseModel


class ErrorDetail(CloudPulseBaseModel):
    """Machine-readable error carried in an HTTP error response."""

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: dict[str, Any] | None = Field(default=None, description="Additional error context")


class ErrorResponse(CloudPulseBaseModel):
    """Standard error response format."""

    detail: ErrorDetail
