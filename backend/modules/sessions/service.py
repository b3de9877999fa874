"""
Session manager implementation.

Issues opaque cookie tokens and keeps the matching session rows in the
database. Only a keyed digest of each token is stored, so a leaked sessions
table can't be replayed as cookies without the session secret.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from shared.models import AuthenticatedUser

from .interfaces import ISessionManager, ISessionRepository
from .models import Session

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionManager(ISessionManager):
    """
    Fixed-window server-side sessions.

    Args:
        repository: Durable session storage
        secret: Key for the token digest (SESSION_SECRET)
        ttl: Session lifetime, measured from creation
        clock: Returns the current UTC time (overridable for tests)
    """

    def __init__(
        self,
        repository: ISessionRepository,
        secret: str,
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise RuntimeError(
                "Session configuration missing. Set the SESSION_SECRET environment variable."
            )
        self._repository = repository
        self._secret = secret.encode("utf-8")
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def _digest(self, token: str) -> str:
        return hmac.new(self._secret, token.encode("utf-8"), hashlib.sha256).hexdigest()

    async def create(self, user: AuthenticatedUser) -> str:
        token = secrets.token_urlsafe(32)
        now = self._clock()
        await self._repository.insert(
            Session(
                sid=self._digest(token),
                user_id=user.id,
                email=user.email,
                created_at=now,
                expires_at=now + self._ttl,
            )
        )
        logger.debug("Session created for user %s", user.id)
        return token

    async def resolve(self, token: Optional[str]) -> Optional[AuthenticatedUser]:
        if not token:
            return None

        sid = self._digest(token)
        session = await self._repository.get(sid)
        if session is None:
            return None

        if session.is_expired(self._clock()):
            await self._repository.delete(sid)
            logger.debug("Expired session removed for user %s", session.user_id)
            return None

        return session.to_identity()

    async def destroy(self, token: Optional[str]) -> None:
        if not token:
            return
        await self._repository.delete(self._digest(token))
