"""Supabase integration: REST client, table names, and repositories."""

from doclibrary.infrastructure.supabase._rest_client import SupabaseRESTClient
from doclibrary.infrastructure.supabase.client import (
    close_supabase,
    get_supabase_client,
    init_supabase,
)

__all__ = [
    "SupabaseRESTClient",
    "close_supabase",
    "get_supabase_client",
    "init_supabase",
]
