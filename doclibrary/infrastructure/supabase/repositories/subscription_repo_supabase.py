"""Supabase-backed subscription repository (implements ISubscriptionRepository)."""

from __future__ import annotations

from typing import Any

from doclibrary.application.dtos.subscription import (
    SubscriptionCreate,
    SubscriptionResult,
    SubscriptionView,
    subscription_amount,
)
from doclibrary.domain.enums import PaymentMethod
from doclibrary.infrastructure.supabase._rest_client import SupabaseRESTClient
from doclibrary.infrastructure.supabase.repositories._projection import (
    first_row,
    joined_payment_method,
    joined_user,
)
from doclibrary.infrastructure.supabase.tables import REPORT_JOIN_SELECT, TABLE_SUBSCRIPTIONS
from doclibrary.shared.utils.datetime import parse_timestamp, to_iso


class SupabaseSubscriptionRepository:
    def __init__(self, client: SupabaseRESTClient) -> None:
        self._table = client.table(TABLE_SUBSCRIPTIONS)

    def _to_result(self, row: dict[str, Any]) -> SubscriptionResult:
        return SubscriptionResult(
            id=str(row["id"]),
            user_id=row.get("user_id") or "",
            plan=row.get("plan") or "",
            status=row.get("status") or "",
            start_date=parse_timestamp(row.get("start_date")),
            end_date=parse_timestamp(row.get("end_date")),
            amount=subscription_amount(row),
            currency=row.get("currency") or "",
            auto_renew=bool(row.get("auto_renew")),
            metadata=row.get("metadata") or {},
        )

    def _to_view(self, row: dict[str, Any]) -> SubscriptionView:
        user_name, user_email = joined_user(row)
        method_type, method_metadata = joined_payment_method(row)
        metadata = row.get("metadata") or {}
        auto_renew = row.get("auto_renew")
        if auto_renew is None:
            auto_renew = not row.get("cancel_at_period_end", False)
        return SubscriptionView(
            id=str(row["id"]),
            user_id=row.get("user_id") or "",
            user_name=user_name,
            user_email=user_email,
            plan=row.get("plan") or (row.get("users") or {}).get("subscription_tier") or "none",
            status=row.get("status") or "",
            start_date=parse_timestamp(row.get("start_date") or row.get("current_period_start")),
            end_date=parse_timestamp(row.get("end_date") or row.get("current_period_end")),
            last_payment=parse_timestamp(row.get("created_at")),
            amount=subscription_amount(row),
            auto_renew=bool(auto_renew),
            payment_method=method_type
            or metadata.get("payment_method")
            or PaymentMethod.CARD.value,
            metadata=method_metadata,
        )

    async def create(self, data: SubscriptionCreate) -> SubscriptionResult:
        rows = await self._table.insert(
            {
                "user_id": data.user_id,
                "plan": data.plan,
                "status": data.status,
                "start_date": to_iso(data.start_date),
                "end_date": to_iso(data.end_date),
                "amount": data.amount,
                "currency": data.currency,
                "auto_renew": data.auto_renew,
                "metadata": data.metadata,
            }
        ).execute()
        row = first_row(rows)
        if row is None:
            raise RuntimeError("Insert into subscriptions returned no row")
        return self._to_result(row)

    async def delete(self, subscription_id: str) -> None:
        await self._table.delete().eq("id", subscription_id).execute()

    async def list_views(self) -> list[SubscriptionView]:
        rows = await (
            self._table.select(REPORT_JOIN_SELECT)
            .order("created_at", ascending=False)
            .execute()
        )
        return [self._to_view(r) for r in rows]

    async def list_rows(self) -> list[dict[str, Any]]:
        return await self._table.select().execute()

    async def update(self, subscription_id: str, values: dict[str, Any]) -> None:
        await self._table.update(values).eq("id", subscription_id).execute()
