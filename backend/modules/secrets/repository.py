"""
Secret repository for database access.

Encapsulates Supabase queries and data mapping for the ``secrets`` table.
"""

from typing import Optional, Any

from shared.repository import BaseRepository

from .models import Secret


class SecretRepository(BaseRepository[Secret]):
    """
    Repository for secrets.

    Every query filters on ``user_id`` in addition to any ID, so a caller
    can't read or change another user's row even with a valid secret ID.
    Inserts, updates and deletes return the affected rows in the same round
    trip.
    """

    TABLE = "secrets"

    async def list_for_owner(self, owner_id: str) -> list[Secret]:
        query = (
            self._db.table(self.TABLE)
            .select("secret_id, user_id, secret, created_at")
            .eq("user_id", owner_id)
            .order("created_at", desc=True)
        )
        result = await self._execute(query)
        return [self._map_to_secret(row) for row in result.data]

    async def insert(self, owner_id: str, content: str) -> Secret:
        data = {"user_id": owner_id, "secret": content}
        result = await self._execute(self._db.table(self.TABLE).insert(data))
        return self._map_to_secret(result.data[0])

    async def update_content(
        self, owner_id: str, secret_id: str, content: str
    ) -> Optional[Secret]:
        query = (
            self._db.table(self.TABLE)
            .update({"secret": content})
            .eq("secret_id", secret_id)
            .eq("user_id", owner_id)
        )
        result = await self._execute(query)
        if not result.data:
            return None
        return self._map_to_secret(result.data[0])

    async def delete(self, owner_id: str, secret_id: str) -> bool:
        query = (
            self._db.table(self.TABLE)
            .delete()
            .eq("secret_id", secret_id)
            .eq("user_id", owner_id)
        )
        result = await self._execute(query)
        return bool(result.data)

    @staticmethod
    def _map_to_secret(row: dict[str, Any]) -> Secret:
        return Secret(
            secret_id=str(row["secret_id"]),
            owner_id=str(row["user_id"]),
            content=row["secret"],
            created_at=row["created_at"],
        )
