"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

import asyncio
import logging
from typing import Any, TypeVar, Generic

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import StorageError


T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - ``_execute`` which runs a built query off the event loop

    The Supabase client is synchronous, so every query must go through
    ``_execute`` to keep request handling non-blocking.

    Example:
        class SecretRepository(BaseRepository[Secret]):
            async def get(self, secret_id: str) -> Optional[Secret]:
                query = self._db.table("secrets").select("*").eq("secret_id", secret_id)
                result = await self._execute(query)
                if not result.data:
                    return None
                return self._map_to_secret(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    async def _execute(self, query: Any) -> Any:
        """
        Execute a PostgREST query builder in a worker thread.

        Raises:
            StorageError: If the database rejects the query or is unreachable.
        """
        try:
            return await asyncio.to_thread(query.execute)
        except APIError as e:
            logger.error("Database query failed: %s (code=%s)", e.message, e.code)
            raise StorageError(
                "Database query failed",
                details={"pg_code": e.code},
                pg_code=e.code,
            ) from e
        except httpx.HTTPError as e:
            logger.error("Database unreachable: %s", e)
            raise StorageError("Database unreachable") from e
