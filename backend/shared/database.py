"""
Database client factory for Supabase.

Provides a service-role client (for admin operations bypassing RLS) and an
anonymous client (for public reads that must respect RLS, such as the map).
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Module-level client cache
_service_client: Optional[Client] = None
_anon_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Used by the admin CMS (articles, prompt templates, site settings), by
    server-side token checks, and by candle writes where ownership is
    verified in the service layer.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_supabase_anon_client() -> Client:
    """
    Get Supabase client with the anonymous key (respects RLS).

    Public endpoints (candle feed, map, published articles) read through
    this client so row-level security decides what is visible.

    Returns:
        Supabase client configured with the anon key
    """
    global _anon_client

    if _anon_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        _anon_client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _anon_client


def reset_client_cache() -> None:
    """
    Reset the cached database clients.

    Useful for testing or when configuration changes.
    """
    global _service_client, _anon_client
    _service_client = None
    _anon_client = None
