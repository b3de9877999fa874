"""
In-memory stand-ins for the Supabase-backed repositories.

They implement the repository protocols so services and routes can be
exercised end to end without a database.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from modules.auth.exceptions import DuplicateEmailError, OAuthExchangeError
from modules.auth.models import GoogleProfile, User
from modules.secrets.models import Secret
from modules.sessions.models import Session


class InMemoryUserRepository:
    def __init__(self) -> None:
        self.rows: dict[str, User] = {}

    async def get_by_email(self, email: str) -> Optional[User]:
        for user in self.rows.values():
            if user.email == email:
                return user
        return None

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self.rows.get(user_id)

    async def create(self, email: str, password_hash: str) -> User:
        if await self.get_by_email(email) is not None:
            raise DuplicateEmailError(email)
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(timezone.utc),
        )
        self.rows[user.id] = user
        return user


class InMemorySessionRepository:
    def __init__(self) -> None:
        self.rows: dict[str, Session] = {}

    async def insert(self, session: Session) -> None:
        self.rows[session.sid] = session

    async def get(self, sid: str) -> Optional[Session]:
        return self.rows.get(sid)

    async def delete(self, sid: str) -> None:
        self.rows.pop(sid, None)


class InMemorySecretRepository:
    def __init__(self) -> None:
        self.rows: dict[str, Secret] = {}
        self._tick = 0

    def _next_timestamp(self) -> datetime:
        # Strictly increasing so newest-first ordering is deterministic.
        self._tick += 1
        return datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=self._tick)

    async def list_for_owner(self, owner_id: str) -> list[Secret]:
        owned = [s for s in self.rows.values() if s.owner_id == owner_id]
        return sorted(owned, key=lambda s: s.created_at, reverse=True)

    async def insert(self, owner_id: str, content: str) -> Secret:
        secret = Secret(
            secret_id=str(uuid.uuid4()),
            owner_id=owner_id,
            content=content,
            created_at=self._next_timestamp(),
        )
        self.rows[secret.secret_id] = secret
        return secret

    async def update_content(
        self, owner_id: str, secret_id: str, content: str
    ) -> Optional[Secret]:
        secret = self.rows.get(secret_id)
        if secret is None or secret.owner_id != owner_id:
            return None
        updated = secret.model_copy(update={"content": content})
        self.rows[secret_id] = updated
        return updated

    async def delete(self, owner_id: str, secret_id: str) -> bool:
        secret = self.rows.get(secret_id)
        if secret is None or secret.owner_id != owner_id:
            return False
        del self.rows[secret_id]
        return True


class FakeGoogleOAuthClient:
    """Returns a canned profile for any code except ``"bad-code"``."""

    def __init__(self, profile: Optional[GoogleProfile] = None, configured: bool = True) -> None:
        self.profile = profile or GoogleProfile(
            sub="google-sub-1", email="g@example.com", email_verified=True
        )
        self.configured = configured
        self.codes: list[str] = []

    def authorization_url(self, state: str) -> str:
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}"

    async def fetch_profile(self, code: str) -> GoogleProfile:
        self.codes.append(code)
        if code == "bad-code":
            raise OAuthExchangeError()
        return self.profile


def register_user(client, email: str = "a@x.com", password: str = "longpass1"):
    """Register through the API; the test client keeps the session cookie."""
    return client.post("/api/register", json={"username": email, "password": password})
