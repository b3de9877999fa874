"""
Centralized configuration for the Secrets backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., SESSION_*, GOOGLE_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Secrets API"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings (the front end is hosted separately and sends credentials)
    cors_origins: list[str] = ["http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "POST"]
    cors_allow_headers: list[str] = ["Content-Type"]

    # Frontend URLs (for OAuth redirects)
    frontend_url: str = "http://localhost:5173"

    # Supabase / Postgres
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_db_url: str = ""
    database_timeout_seconds: float = 10.0

    # Sessions
    session_secret: str = ""
    session_cookie_name: str = "sessionId"
    session_ttl_hours: int = 24
    session_cookie_domain: Optional[str] = None
    session_cookie_secure: Optional[bool] = None

    # Credentials
    bcrypt_rounds: int = 10
    password_min_length: int = 8
    secret_max_length: int = 10_000

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_callback_url: str = "http://localhost:8000/auth/google/secrets"
    oauth_timeout_seconds: float = 10.0

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cookie_secure(self) -> bool:
        """Secure flag for the session cookie; forced on in production."""
        if self.session_cookie_secure is not None:
            return self.session_cookie_secure
        return self.is_production

    @property
    def cookie_samesite(self) -> str:
        # Cross-site credentialed requests need SameSite=None, which browsers
        # only accept together with Secure.
        return "none" if self.cookie_secure else "lax"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
