"""
Authentication strategies.

A strategy turns a credential (email + password, or a Google profile) into a
stored ``User``. Each ``authenticate`` call either returns the user or raises
an ``AuthFailure`` subclass.
"""

import logging

from shared.exceptions import SecretsAPIError

from .exceptions import (
    AuthInternalError,
    DuplicateEmailError,
    InvalidCredentialsError,
    ProfileIncompleteError,
)
from .hashing import PasswordHasher
from .interfaces import IUserRepository
from .models import GoogleProfile, User, OAUTH_PASSWORD_SENTINEL

logger = logging.getLogger(__name__)


class LocalStrategy:
    """Verifies an email and password against the users table."""

    def __init__(self, users: IUserRepository, hasher: PasswordHasher):
        self._users = users
        self._hasher = hasher

    async def authenticate(self, email: str, password: str) -> User:
        user = await self._users.get_by_email(email)
        if user is None:
            raise InvalidCredentialsError(InvalidCredentialsError.USER_NOT_FOUND)

        # Accounts created through Google never had a local password.
        if user.is_oauth_only:
            raise InvalidCredentialsError(InvalidCredentialsError.INVALID_PASSWORD)

        if not await self._hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError(InvalidCredentialsError.INVALID_PASSWORD)

        return user


class GoogleStrategy:
    """
    Maps a Google profile onto a local user.

    Users are linked by email: a Google login for an email that already has a
    local account signs into that account. See DESIGN.md for the open
    question this raises.
    """

    def __init__(self, users: IUserRepository):
        self._users = users

    async def authenticate(self, profile: GoogleProfile) -> User:
        if not profile.email or not profile.email_verified:
            raise ProfileIncompleteError()

        try:
            user = await self._users.get_by_email(profile.email)
            if user is not None:
                return user
            try:
                user = await self._users.create(profile.email, OAUTH_PASSWORD_SENTINEL)
            except DuplicateEmailError:
                # A concurrent first login created the row between our read
                # and our insert.
                user = await self._users.get_by_email(profile.email)
                if user is None:
                    raise AuthInternalError()
                return user
        except AuthInternalError:
            raise
        except SecretsAPIError as e:
            logger.error("Storage failure during Google login: %s", e.message)
            raise AuthInternalError() from e

        logger.info("Created user %s from Google profile", user.id)
        return user
