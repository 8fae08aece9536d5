"""Table, RPC and storage bucket names (schema-in-code).

The schema itself lives in the Supabase project (SQL migrations are not part
of this repository). Use these constants so names stay consistent.

Example:
    from doclibrary.infrastructure.supabase.tables import TABLE_DOCUMENTS

    rows = await client.table(TABLE_DOCUMENTS).select().eq("category", "Hansards").execute()
"""

TABLE_DOCUMENTS = "documents"
TABLE_DOCUMENT_VERSIONS = "document_versions"
TABLE_USERS = "users"
TABLE_SUBSCRIPTIONS = "subscriptions"
TABLE_PAYMENTS = "payments"
TABLE_SEARCH_LOGS = "search_logs"

# Postgres functions exposed through PostgREST
RPC_FETCH_USERS_WITH_AUTH = "fetch_users_with_auth"

# Embedded selects for the reporting joins (users and payment_methods via FK)
REPORT_JOIN_SELECT = """
    *,
    users:user_id ( id, email, role, subscription_tier ),
    payment_methods:payment_method_id ( type, details )
"""
