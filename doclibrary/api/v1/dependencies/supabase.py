"""Supabase client and repository dependencies (composition root).

Routes never construct repositories; they depend on use cases built from
these. Repositories are cheap wrappers around the shared client.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException

from doclibrary.infrastructure.supabase import SupabaseRESTClient, get_supabase_client
from doclibrary.infrastructure.supabase.auth_provider import SupabaseAuthProvider
from doclibrary.infrastructure.supabase.repositories import (
    SupabaseDocumentRepository,
    SupabaseDocumentStorage,
    SupabasePaymentRepository,
    SupabaseSearchLogRepository,
    SupabaseSubscriptionRepository,
    SupabaseUserRepository,
)


def get_supabase() -> SupabaseRESTClient:
    """Return the Supabase client or raise HTTPException 503 with standard message."""
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Supabase not configured (set SUPABASE_URL and SUPABASE_ANON_KEY)",
        )
    return client


SupabaseDep = Annotated[SupabaseRESTClient, Depends(get_supabase)]


def get_auth_provider(client: SupabaseDep) -> SupabaseAuthProvider:
    return SupabaseAuthProvider(client)


def get_document_repo(client: SupabaseDep) -> SupabaseDocumentRepository:
    return SupabaseDocumentRepository(client)


def get_document_storage(client: SupabaseDep) -> SupabaseDocumentStorage:
    return SupabaseDocumentStorage(client)


def get_user_repo(client: SupabaseDep) -> SupabaseUserRepository:
    return SupabaseUserRepository(client)


def get_subscription_repo(client: SupabaseDep) -> SupabaseSubscriptionRepository:
    return SupabaseSubscriptionRepository(client)


def get_payment_repo(client: SupabaseDep) -> SupabasePaymentRepository:
    return SupabasePaymentRepository(client)


def get_search_log_repo(client: SupabaseDep) -> SupabaseSearchLogRepository:
    return SupabaseSearchLogRepository(client)
