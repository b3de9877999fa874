"""
Secrets module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Secret(BaseModel):
    """A stored secret."""

    secret_id: str = Field(..., description="Secret ID (UUID)")
    owner_id: str = Field(..., description="ID of the owning user")
    content: str
    created_at: datetime

    def to_response(self) -> "SecretResponse":
        return SecretResponse(
            secret_id=self.secret_id,
            secret=self.content,
            created_at=self.created_at,
        )


class SecretResponse(BaseModel):
    """Wire form of a secret, as the front end expects it."""

    secret_id: str
    secret: str
    created_at: datetime


class SubmitSecretRequest(BaseModel):
    """
    Body of POST /api/submit.

    Without ``secretId`` a new secret is created; with it, that secret's
    content is replaced.
    """

    secret: str
    secretId: Optional[str] = None


class DeleteSecretRequest(BaseModel):
    """Body of POST /api/secrets/delete."""

    secretId: str


class SecretListResponse(BaseModel):
    success: bool = True
    secrets: list[SecretResponse]


class SubmitSecretResponse(BaseModel):
    success: bool = True
    secret: SecretResponse


class DeleteSecretResponse(BaseModel):
    success: bool = True
