"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This is the identity snapshot stored with a session and made available
    to route handlers via dependency injection.
    """

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="User's email address, as stored")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
