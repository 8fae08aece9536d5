"""Supabase-backed repository implementations."""

from doclibrary.infrastructure.supabase.repositories.document_repo_supabase import (
    SupabaseDocumentRepository,
)
from doclibrary.infrastructure.supabase.repositories.document_storage_supabase import (
    SupabaseDocumentStorage,
)
from doclibrary.infrastructure.supabase.repositories.payment_repo_supabase import (
    SupabasePaymentRepository,
)
from doclibrary.infrastructure.supabase.repositories.search_log_repo_supabase import (
    SupabaseSearchLogRepository,
)
from doclibrary.infrastructure.supabase.repositories.subscription_repo_supabase import (
    SupabaseSubscriptionRepository,
)
from doclibrary.infrastructure.supabase.repositories.user_repo_supabase import (
    SupabaseUserRepository,
)

__all__ = [
    "SupabaseDocumentRepository",
    "SupabaseDocumentStorage",
    "SupabasePaymentRepository",
    "SupabaseSearchLogRepository",
    "SupabaseSubscriptionRepository",
    "SupabaseUserRepository",
]
