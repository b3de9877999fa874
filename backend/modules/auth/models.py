"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser


# Placeholder password hashes for accounts created through Google. Neither is
# a valid bcrypt hash, so they can never match a password.
OAUTH_PASSWORD_SENTINEL = "google"
OAUTH_PASSWORD_SENTINELS = frozenset({"google", "google-oauth"})


class User(BaseModel):
    """A stored user account."""

    id: str = Field(..., description="User ID (UUID)")
    email: str = Field(..., description="Email address, case-sensitive as stored")
    password_hash: str = Field(..., description="bcrypt hash or OAuth sentinel")
    created_at: Optional[datetime] = Field(None, description="Account creation time")

    model_config = {"frozen": True}

    @property
    def is_oauth_only(self) -> bool:
        """True when the account has no local password."""
        return self.password_hash in OAUTH_PASSWORD_SENTINELS

    def to_identity(self) -> AuthenticatedUser:
        return AuthenticatedUser(id=self.id, email=self.email)


class GoogleProfile(BaseModel):
    """
    The subset of the Google userinfo response we rely on.

    Field names follow the OpenID Connect userinfo claims.
    """

    model_config = {"extra": "ignore"}

    sub: str
    email: Optional[str] = None
    email_verified: bool = False
    name: Optional[str] = None


class CredentialsRequest(BaseModel):
    """Body of POST /api/login and POST /api/register."""

    username: str = Field(..., description="Email address")
    password: str


class UserResponse(BaseModel):
    """Public view of a user."""

    id: str
    email: str


class AuthResponse(BaseModel):
    """Response of a successful login or registration."""

    success: bool = True
    user: UserResponse


class CheckAuthResponse(BaseModel):
    """Response of GET /api/check-auth."""

    isAuthenticated: bool
    user: Optional[UserResponse] = None
