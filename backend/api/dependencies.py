"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The container is built once per application by ``create_app`` and stored on
``app.state``; there is no process-wide service singleton.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from fastapi import Request

from shared.config import Settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.auth.oauth import GoogleOAuthClient
    from modules.secrets.interfaces import ISecretRepository, ISecretService
    from modules.sessions.interfaces import ISessionManager, ISessionRepository


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached for the lifetime
    of the container. Repositories and the OAuth client can be injected,
    which is how tests swap in in-memory storage.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        db: "Optional[Client]" = None,
        user_repository: "Optional[IUserRepository]" = None,
        session_repository: "Optional[ISessionRepository]" = None,
        secret_repository: "Optional[ISecretRepository]" = None,
        oauth_client: "Optional[GoogleOAuthClient]" = None,
    ) -> None:
        self.settings = settings
        self._db = db
        self._user_repository = user_repository
        self._session_repository = session_repository
        self._secret_repository = secret_repository
        self._oauth_client = oauth_client
        self._auth_service: "IAuthService | None" = None
        self._session_manager: "ISessionManager | None" = None
        self._secret_service: "ISecretService | None" = None

    @property
    def db(self) -> "Client":
        """Get the Supabase client."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client(self.settings)
        return self._db

    @property
    def user_repository(self) -> "IUserRepository":
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            self._user_repository = UserRepository(self.db)
        return self._user_repository

    @property
    def session_repository(self) -> "ISessionRepository":
        if self._session_repository is None:
            from modules.sessions.repository import SessionRepository
            self._session_repository = SessionRepository(self.db)
        return self._session_repository

    @property
    def secret_repository(self) -> "ISecretRepository":
        if self._secret_repository is None:
            from modules.secrets.repository import SecretRepository
            self._secret_repository = SecretRepository(self.db)
        return self._secret_repository

    @property
    def oauth_client(self) -> "GoogleOAuthClient":
        if self._oauth_client is None:
            from modules.auth.oauth import GoogleOAuthClient
            self._oauth_client = GoogleOAuthClient(
                client_id=self.settings.google_client_id,
                client_secret=self.settings.google_client_secret,
                callback_url=self.settings.google_callback_url,
                timeout=self.settings.oauth_timeout_seconds,
            )
        return self._oauth_client

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.hashing import PasswordHasher
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.user_repository,
                hasher=PasswordHasher(rounds=self.settings.bcrypt_rounds),
                oauth_client=self.oauth_client,
                password_min_length=self.settings.password_min_length,
            )
        return self._auth_service

    @property
    def sessions(self) -> "ISessionManager":
        """Get the session manager instance."""
        if self._session_manager is None:
            from modules.sessions.service import SessionManager
            self._session_manager = SessionManager(
                repository=self.session_repository,
                secret=self.settings.session_secret,
                ttl=timedelta(hours=self.settings.session_ttl_hours),
            )
        return self._session_manager

    @property
    def secrets(self) -> "ISecretService":
        """Get the secret service instance."""
        if self._secret_service is None:
            from modules.secrets.service import SecretService
            self._secret_service = SecretService(
                repository=self.secret_repository,
                max_length=self.settings.secret_max_length,
            )
        return self._secret_service


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency for the application's service container."""
    return request.app.state.container


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency for the application's settings."""
    return get_container(request).settings


def get_auth_service(request: Request) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container(request).auth


def get_session_manager(request: Request) -> "ISessionManager":
    """FastAPI dependency for session manager."""
    return get_container(request).sessions


def get_secret_service(request: Request) -> "ISecretService":
    """FastAPI dependency for secret service."""
    return get_container(request).secrets
