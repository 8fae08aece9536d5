"""Supabase-backed search log repository (implements ISearchLogRepository)."""

from __future__ import annotations

from doclibrary.infrastructure.supabase._rest_client import SupabaseRESTClient
from doclibrary.infrastructure.supabase.tables import TABLE_SEARCH_LOGS


class SupabaseSearchLogRepository:
    def __init__(self, client: SupabaseRESTClient) -> None:
        self._table = client.table(TABLE_SEARCH_LOGS)

    async def insert(
        self,
        search_term: str,
        user_id: str | None,
        results_count: int,
        search_time: float,
    ) -> None:
        await self._table.insert(
            {
                "search_term": search_term,
                "user_id": user_id,
                "results_count": results_count,
                "search_time": search_time,
            }
        ).execute()
