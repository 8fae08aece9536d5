"""Supabase-backed payment repository (implements IPaymentRepository)."""

from __future__ import annotations

from typing import Any

from doclibrary.application.dtos.payment import PaymentView
from doclibrary.domain.enums import PaymentMethod, PaymentType
from doclibrary.infrastructure.supabase._rest_client import SupabaseRESTClient
from doclibrary.infrastructure.supabase.repositories._projection import (
    joined_payment_method,
    joined_user,
)
from doclibrary.infrastructure.supabase.tables import REPORT_JOIN_SELECT, TABLE_PAYMENTS
from doclibrary.shared.utils.datetime import parse_timestamp


class SupabasePaymentRepository:
    def __init__(self, client: SupabaseRESTClient) -> None:
        self._table = client.table(TABLE_PAYMENTS)

    def _to_view(self, row: dict[str, Any]) -> PaymentView:
        user_name, user_email = joined_user(row)
        method_type, method_metadata = joined_payment_method(row)
        return PaymentView(
            id=str(row["id"]),
            user_id=row.get("user_id") or "",
            user_name=user_name,
            user_email=user_email,
            amount=float(row.get("amount") or 0),
            currency=row.get("currency") or "",
            status=row.get("status") or "",
            type=(row.get("metadata") or {}).get("type") or PaymentType.ONE_TIME.value,
            payment_method=method_type or PaymentMethod.CARD.value,
            date=parse_timestamp(row.get("created_at")),
            metadata=method_metadata,
        )

    async def list_views(self) -> list[PaymentView]:
        rows = await (
            self._table.select(REPORT_JOIN_SELECT)
            .order("created_at", ascending=False)
            .execute()
        )
        return [self._to_view(r) for r in rows]

    async def list_rows(self) -> list[dict[str, Any]]:
        return await self._table.select().execute()

    async def get_metadata(self, payment_id: str) -> dict[str, Any] | None:
        row = await self._table.select("id, metadata").eq("id", payment_id).single().execute()
        if row is None:
            return None
        return row.get("metadata") or {}

    async def update(self, payment_id: str, values: dict[str, Any]) -> None:
        await self._table.update(values).eq("id", payment_id).execute()
