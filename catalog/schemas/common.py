"""Common schemas used across the API."""

from typing import Any

from pydantic import BaseModel


class FieldError(BaseModel):
    """One failing field in a validation error."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": str, "details": [ { "field": str, "message": str } ] | null }
    """

    error: str
    details: list[dict[str, Any]] | None = None
