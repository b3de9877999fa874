"""
Authentication service implementation.

Ties the user repository, password hasher and strategies together. One
instance is built at startup by the service container and shared by all
requests; it holds no per-request state.
"""

import logging

from .exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidRegistrationError,
    OAuthExchangeError,
)
from .hashing import PasswordHasher, BCRYPT_MAX_PASSWORD_BYTES
from .interfaces import IAuthService, IUserRepository
from .models import GoogleProfile, User
from .oauth import GoogleOAuthClient
from .strategies import GoogleStrategy, LocalStrategy

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Local accounts use bcrypt-hashed passwords; Google accounts are linked
    to local users by email.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: PasswordHasher,
        oauth_client: GoogleOAuthClient,
        password_min_length: int = 8,
    ):
        self._users = users
        self._hasher = hasher
        self._oauth = oauth_client
        self._password_min_length = password_min_length
        self._local = LocalStrategy(users, hasher)
        self._google = GoogleStrategy(users)

    async def register(self, email: str, password: str) -> User:
        email = self._validate_email(email)
        self._validate_password(password)

        if await self._users.get_by_email(email) is not None:
            logger.info("Registration rejected: email already registered")
            raise DuplicateEmailError(email)

        password_hash = await self._hasher.hash(password)
        # The unique constraint still guards against a concurrent registration.
        user = await self._users.create(email, password_hash)
        logger.info("Registered user %s", user.id)
        return user

    async def login(self, email: str, password: str) -> User:
        try:
            user = await self._local.authenticate(email.strip(), password)
        except InvalidCredentialsError as e:
            logger.info("Local login failed: %s", e.reason)
            raise
        logger.info("User %s logged in with password", user.id)
        return user

    def google_authorization_url(self, state: str) -> str:
        if not self._oauth.configured:
            raise OAuthExchangeError("Google sign-in is not configured")
        return self._oauth.authorization_url(state)

    async def login_with_google(self, code: str) -> User:
        profile = await self._oauth.fetch_profile(code)
        return await self.login_with_profile(profile)

    async def login_with_profile(self, profile: GoogleProfile) -> User:
        user = await self._google.authenticate(profile)
        logger.info("User %s logged in with Google", user.id)
        return user

    @staticmethod
    def _validate_email(email: str) -> str:
        email = email.strip()
        if not email:
            raise InvalidRegistrationError("Email is required", field="username")
        if "@" not in email:
            raise InvalidRegistrationError("Email address is invalid", field="username")
        return email

    def _validate_password(self, password: str) -> None:
        if len(password) < self._password_min_length:
            raise InvalidRegistrationError(
                f"Password must be at least {self._password_min_length} characters long",
                field="password",
            )
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise InvalidRegistrationError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long",
                field="password",
            )
