"""
User repository for database access.

Encapsulates Supabase queries and data mapping for the ``users`` table.
"""

from typing import Optional, Any

from shared.exceptions import StorageError
from shared.repository import BaseRepository

from .exceptions import DuplicateEmailError
from .models import User


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.

    Email lookups are exact matches; no case folding is applied.
    """

    TABLE = "users"

    async def get_by_email(self, email: str) -> Optional[User]:
        query = self._db.table(self.TABLE).select("*").eq("email", email).limit(1)
        result = await self._execute(query)
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def get_by_id(self, user_id: str) -> Optional[User]:
        query = self._db.table(self.TABLE).select("*").eq("id", user_id).limit(1)
        result = await self._execute(query)
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def create(self, email: str, password_hash: str) -> User:
        """
        Insert a user and return the stored row.

        The insert returns the new row in the same round trip, so the
        generated ID is available without a second query.

        Raises:
            DuplicateEmailError: If the unique constraint on email fires.
        """
        data = {"email": email, "password": password_hash}
        try:
            result = await self._execute(self._db.table(self.TABLE).insert(data))
        except StorageError as e:
            if e.is_unique_violation:
                raise DuplicateEmailError(email) from e
            raise
        return self._map_to_user(result.data[0])

    @staticmethod
    def _map_to_user(row: dict[str, Any]) -> User:
        return User(
            id=str(row["id"]),
            email=row["email"],
            password_hash=row["password"],
            created_at=row.get("created_at"),
        )
