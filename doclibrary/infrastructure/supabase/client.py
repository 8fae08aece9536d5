"""Supabase client (REST-based, no supabase-py).

Initialized at app startup from SUPABASE_URL and SUPABASE_SERVICE_KEY (falling
back to SUPABASE_ANON_KEY). Closed at shutdown so the shared httpx
connection pool is released. Use cases never reach for this directly; the
composition root hands them repositories built around the client.
"""

import logging

from doclibrary.core.config import Settings, get_settings
from doclibrary.infrastructure.supabase._rest_client import SupabaseRESTClient

logger = logging.getLogger(__name__)

_supabase_client: SupabaseRESTClient | None = None


def init_supabase(settings: Settings | None = None) -> bool:
    """Initialize the Supabase client.

    Safe to call when Supabase is disabled (no-op). Idempotent if already
    initialized. On initialization error, logs the exception and returns False
    so the app can start (health endpoints still answer).

    Returns:
        True if the client was initialized, False if disabled or on error.
    """
    global _supabase_client
    if _supabase_client is not None:
        return True
    s = settings or get_settings()
    if not s.supabase_enabled:
        logger.info("Supabase disabled; data endpoints will return 503")
        return False
    try:
        _supabase_client = SupabaseRESTClient(
            s.supabase_url,
            s.supabase_api_key,
            timeout=s.http_timeout_seconds,
        )
        return True
    except Exception:
        logger.exception("Supabase initialization failed")
        return False


def get_supabase_client() -> SupabaseRESTClient | None:
    """Return the Supabase client, or None if not configured."""
    return _supabase_client


async def close_supabase() -> None:
    """Close the Supabase client's HTTP connection pool. Call from app shutdown."""
    global _supabase_client
    if _supabase_client is not None:
        await _supabase_client.aclose()
        _supabase_client = None
        logger.info("Supabase HTTP client closed")
