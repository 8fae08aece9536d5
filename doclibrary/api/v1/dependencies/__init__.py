"""FastAPI dependencies: Supabase wiring, caller session, and use case builders."""

from doclibrary.api.v1.dependencies.auth import (
    OptionalSession,
    Session,
    get_authorization_service,
    get_session,
    get_session_optional,
)
from doclibrary.api.v1.dependencies.services import (
    get_checkout_service,
    get_document_management_service,
    get_document_query_service,
    get_document_upload_service,
    get_http_client,
    get_payment_report_service,
    get_search_log_service,
    get_subscription_admin_service,
    get_user_admin_service,
)
from doclibrary.api.v1.dependencies.supabase import get_supabase

__all__ = [
    "OptionalSession",
    "Session",
    "get_authorization_service",
    "get_checkout_service",
    "get_document_management_service",
    "get_document_query_service",
    "get_document_upload_service",
    "get_http_client",
    "get_payment_report_service",
    "get_search_log_service",
    "get_session",
    "get_session_optional",
    "get_subscription_admin_service",
    "get_supabase",
    "get_user_admin_service",
]
