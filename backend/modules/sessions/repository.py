"""
Session repository for database access.

Sessions are kept in the same Postgres database as users and secrets, so they
survive restarts and are shared by every API instance.
"""

from typing import Optional, Any

from shared.repository import BaseRepository

from .models import Session


class SessionRepository(BaseRepository[Session]):
    """Repository for the ``sessions`` table."""

    TABLE = "sessions"

    async def insert(self, session: Session) -> None:
        data = {
            "sid": session.sid,
            "user_id": session.user_id,
            "email": session.email,
            "created_at": session.created_at.isoformat(),
            "expires_at": session.expires_at.isoformat(),
        }
        await self._execute(self._db.table(self.TABLE).insert(data))

    async def get(self, sid: str) -> Optional[Session]:
        query = self._db.table(self.TABLE).select("*").eq("sid", sid).limit(1)
        result = await self._execute(query)
        if not result.data:
            return None
        return self._map_to_session(result.data[0])

    async def delete(self, sid: str) -> None:
        await self._execute(self._db.table(self.TABLE).delete().eq("sid", sid))

    @staticmethod
    def _map_to_session(row: dict[str, Any]) -> Session:
        return Session(
            sid=row["sid"],
            user_id=str(row["user_id"]),
            email=row["email"],
            created_at=row["created_at"],
            expires_at=row["expires_at"],
        )
