"""
MindfulAI - Supabase Client.

Low-level access to Supabase auth and tables. The onboarding gateway
is the only caller.
"""

from supabase import Client, create_client

from mindful.config import settings

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.
    Raises RuntimeError if Supabase is not configured.
    """
    global _client

    if _client is None:
        if not settings.supabase_configured:
            raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def reset_client() -> None:
    """Drop the cached client (tests, settings reload)."""
    global _client
    _client = None
