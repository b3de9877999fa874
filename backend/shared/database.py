"""
Database client factory for Supabase.

The backend talks to its Postgres database through the Supabase service-role
client. Users, secrets and sessions all live in that one database.
"""

from typing import Optional
from supabase import create_client, Client, ClientOptions

from .config import Settings, get_settings

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client(settings: Optional[Settings] = None) -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Ownership checks are therefore enforced by the repositories, which
    filter every secret query by ``user_id``.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = settings or get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
            options=ClientOptions(
                postgrest_client_timeout=settings.database_timeout_seconds,
            ),
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
