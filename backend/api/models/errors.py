"""
Error response models.

Standardized error responses for the API.
"""

from pydantic import BaseModel
from typing import Optional


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    error: str
    message: Optional[str] = None


class ValidationErrorResponse(BaseModel):
    """Request body validation error response format."""

    success: bool = False
    error: str = "VALIDATION_ERROR"
    message: str = "Invalid request body"
    detail: list[dict]
