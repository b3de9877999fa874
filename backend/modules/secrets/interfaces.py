"""
Secrets module interfaces.

Every operation takes the owner's ID and only ever touches that owner's rows.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Secret


@runtime_checkable
class ISecretRepository(Protocol):
    """Storage operations for secrets, always scoped to an owner."""

    async def list_for_owner(self, owner_id: str) -> list[Secret]:
        """Return the owner's secrets, newest first."""
        ...

    async def insert(self, owner_id: str, content: str) -> Secret:
        """Insert a secret and return the stored row."""
        ...

    async def update_content(
        self, owner_id: str, secret_id: str, content: str
    ) -> Optional[Secret]:
        """Replace a secret's content. Returns None if no row matched."""
        ...

    async def delete(self, owner_id: str, secret_id: str) -> bool:
        """Delete a secret. Returns False if no row matched."""
        ...


@runtime_checkable
class ISecretService(Protocol):
    """Interface for secret CRUD operations."""

    async def list_secrets(self, owner_id: str) -> list[Secret]:
        ...

    async def create_secret(self, owner_id: str, content: str) -> Secret:
        """
        Raises:
            EmptySecretError: If content is blank
        """
        ...

    async def update_secret(self, owner_id: str, secret_id: str, content: str) -> Secret:
        """
        Raises:
            EmptySecretError: If content is blank
            SecretNotFoundError: If the owner has no such secret
        """
        ...

    async def delete_secret(self, owner_id: str, secret_id: str) -> None:
        """
        Raises:
            SecretNotFoundError: If the owner has no such secret
        """
        ...
