"""
Password hashing with bcrypt.

bcrypt is CPU-bound, so both operations run in a worker thread and never
stall the event loop.
"""

import asyncio

import bcrypt

# bcrypt only considers the first 72 bytes of a password and newer releases
# refuse longer input outright.
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted one-way password hashing."""

    def __init__(self, rounds: int = 10):
        self._rounds = rounds

    async def hash(self, plaintext: str) -> str:
        """Hash a password. Two calls with the same input give different hashes."""
        return await asyncio.to_thread(self._hash_sync, plaintext)

    async def verify(self, plaintext: str, password_hash: str) -> bool:
        """
        Check a password against a stored hash.

        Returns False for a mismatch and for any hash bcrypt can't parse
        (including the OAuth sentinel values); it never raises.
        """
        return await asyncio.to_thread(self._verify_sync, plaintext, password_hash)

    def _hash_sync(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def _verify_sync(plaintext: str, password_hash: str) -> bool:
        password = plaintext.encode("utf-8")
        if len(password) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(password, password_hash.encode("utf-8"))
        except ValueError:
            return False
