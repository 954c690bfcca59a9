"""
Supabase client for the relational storage backend.

Only built when STORAGE_BACKEND=supabase; the in-memory stores never
touch it.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    The shared service-role client used by every Supabase repository.

    Trak checks ownership and company scope in its services, so the
    repositories read and write the tables without row-level security.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "STORAGE_BACKEND=supabase needs SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY"
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """Drop the cached client so the next call rereads the settings."""
    global _service_client
    _service_client = None
