"""
Secrets module.

User-owned short text records.

Public API:
- ISecretService: Interface for secret CRUD
- SecretService: Default implementation
- Secret: Stored secret model
- Exceptions: SecretNotFoundError, EmptySecretError, SecretTooLongError
"""

from .interfaces import ISecretService, ISecretRepository
from .models import Secret
from .exceptions import SecretNotFoundError, EmptySecretError, SecretTooLongError
from .service import SecretService

__all__ = [
    "ISecretService",
    "ISecretRepository",
    "Secret",
    "SecretService",
    "SecretNotFoundError",
    "EmptySecretError",
    "SecretTooLongError",
]
