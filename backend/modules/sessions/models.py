"""
Session module data models.
"""

from datetime import datetime
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser


class Session(BaseModel):
    """
    A server-side session row.

    ``sid`` is a keyed digest of the cookie token; the token itself is
    never stored.
    """

    sid: str = Field(..., description="HMAC-SHA256 digest of the session token")
    user_id: str
    email: str
    created_at: datetime
    expires_at: datetime

    model_config = {"frozen": True}

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_identity(self) -> AuthenticatedUser:
        return AuthenticatedUser(id=self.user_id, email=self.email)
