"""
Session module interfaces.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import Session


@runtime_checkable
class ISessionRepository(Protocol):
    """Durable storage for sessions."""

    async def insert(self, session: Session) -> None:
        ...

    async def get(self, sid: str) -> Optional[Session]:
        ...

    async def delete(self, sid: str) -> None:
        """Delete a session. Deleting a missing session is not an error."""
        ...


@runtime_checkable
class ISessionManager(Protocol):
    """
    Interface for session lifecycle operations.

    Sessions live for a fixed window from creation; resolving a session
    does not extend it.
    """

    async def create(self, user: AuthenticatedUser) -> str:
        """
        Start a session for a user.

        Returns:
            The opaque token to hand to the client as a cookie
        """
        ...

    async def resolve(self, token: Optional[str]) -> Optional[AuthenticatedUser]:
        """Return the identity bound to a token, or None if missing or expired."""
        ...

    async def destroy(self, token: Optional[str]) -> None:
        """End a session. Idempotent."""
        ...
