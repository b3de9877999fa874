"""
Secrets service implementation.

CRUD over the caller's own secrets. Ownership is part of every storage call;
there is no code path that looks a secret up by ID alone.
"""

import logging
import uuid

from .exceptions import EmptySecretError, SecretNotFoundError, SecretTooLongError
from .interfaces import ISecretRepository, ISecretService
from .models import Secret

logger = logging.getLogger(__name__)


class SecretService(ISecretService):
    """Secret CRUD scoped to the owner of record."""

    def __init__(self, repository: ISecretRepository, max_length: int = 10_000):
        self._repository = repository
        self._max_length = max_length

    async def list_secrets(self, owner_id: str) -> list[Secret]:
        return await self._repository.list_for_owner(owner_id)

    async def create_secret(self, owner_id: str, content: str) -> Secret:
        self._validate_content(content)
        secret = await self._repository.insert(owner_id, content)
        logger.info("User %s created secret %s", owner_id, secret.secret_id)
        return secret

    async def update_secret(self, owner_id: str, secret_id: str, content: str) -> Secret:
        self._validate_content(content)
        secret_id = self._normalize_id(secret_id)
        secret = await self._repository.update_content(owner_id, secret_id, content)
        if secret is None:
            raise SecretNotFoundError(secret_id)
        logger.info("User %s updated secret %s", owner_id, secret_id)
        return secret

    async def delete_secret(self, owner_id: str, secret_id: str) -> None:
        secret_id = self._normalize_id(secret_id)
        if not await self._repository.delete(owner_id, secret_id):
            raise SecretNotFoundError(secret_id)
        logger.info("User %s deleted secret %s", owner_id, secret_id)

    def _validate_content(self, content: str) -> None:
        if not content or not content.strip():
            raise EmptySecretError()
        if len(content) > self._max_length:
            raise SecretTooLongError(self._max_length)

    @staticmethod
    def _normalize_id(secret_id: str) -> str:
        # A malformed ID can't name any row; answer exactly as for a missing one.
        try:
            return str(uuid.UUID(str(secret_id)))
        except ValueError:
            raise SecretNotFoundError(str(secret_id))
