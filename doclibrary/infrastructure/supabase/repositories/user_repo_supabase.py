"""Supabase-backed user profile repository (implements IUserRepository)."""

from __future__ import annotations

from typing import Any

from doclibrary.application.dtos.user import UserProfile, UserUpdate, UserView
from doclibrary.domain.enums import UserStatus
from doclibrary.domain.value_objects.metadata import merge_metadata
from doclibrary.infrastructure.supabase._rest_client import SupabaseRESTClient
from doclibrary.infrastructure.supabase.repositories._projection import (
    UNKNOWN_USER_EMAIL,
    UNKNOWN_USER_NAME,
    first_row,
)
from doclibrary.infrastructure.supabase.tables import (
    RPC_FETCH_USERS_WITH_AUTH,
    TABLE_USERS,
)
from doclibrary.shared.utils.datetime import parse_timestamp

_PROFILE_COLUMNS = "id, role, subscription_tier"


class SupabaseUserRepository:
    """User profiles in the users table; auth data comes from fetch_users_with_auth."""

    def __init__(self, client: SupabaseRESTClient) -> None:
        self._client = client
        self._table = client.table(TABLE_USERS)

    def _to_profile(self, row: dict[str, Any]) -> UserProfile:
        return UserProfile(
            id=str(row["id"]),
            role=row.get("role"),
            subscription_tier=row.get("subscription_tier"),
        )

    def _to_view(self, row: dict[str, Any]) -> UserView:
        created_at = parse_timestamp(row.get("created_at"))
        last_login = parse_timestamp(row.get("last_sign_in_at")) or created_at
        return UserView(
            id=str(row["id"]),
            name=row.get("display_name") or UNKNOWN_USER_NAME,
            email=row.get("email") or UNKNOWN_USER_EMAIL,
            role=row.get("role") or row.get("user_role"),
            status=row.get("status") or UserStatus.ACTIVE.value,
            subscription_tier=row.get("subscription_tier"),
            last_login=last_login,
            created_at=created_at,
            metadata=row.get("metadata") or {},
        )

    async def get_profile(self, user_id: str) -> UserProfile | None:
        """Return profile by ID (one round trip; never cached)."""
        row = (
            await self._table.select(_PROFILE_COLUMNS).eq("id", user_id).single().execute()
        )
        return self._to_profile(row) if row else None

    async def create_profile(
        self, user_id: str, role: str, subscription_tier: str | None = None
    ) -> UserProfile:
        rows = await self._table.insert(
            {"id": user_id, "role": role, "subscription_tier": subscription_tier}
        ).execute()
        row = first_row(rows) or {
            "id": user_id,
            "role": role,
            "subscription_tier": subscription_tier,
        }
        return self._to_profile(row)

    async def set_subscription_tier(self, user_id: str, tier: str | None) -> None:
        await self._table.update({"subscription_tier": tier}).eq("id", user_id).execute()

    async def list_users(self) -> list[UserView]:
        rows = await self._client.rpc(RPC_FETCH_USERS_WITH_AUTH) or []
        return [self._to_view(r) for r in rows]

    async def list_profiles(self) -> list[dict[str, Any]]:
        return await self._table.select().execute()

    async def update_user(self, user_id: str, data: UserUpdate) -> None:
        """Write only the fields set on data; metadata is merged over the stored metadata."""
        values: dict[str, Any] = {}
        if data.role is not None:
            values["role"] = data.role
        if data.status is not None:
            values["status"] = data.status
        if data.subscription_tier is not None:
            values["subscription_tier"] = data.subscription_tier
        if data.metadata is not None:
            current = await self._table.select("metadata").eq("id", user_id).single().execute()
            values["metadata"] = merge_metadata((current or {}).get("metadata"), data.metadata)
        if not values:
            return
        await self._table.update(values).eq("id", user_id).execute()

    async def delete_user(self, user_id: str) -> None:
        await self._table.delete().eq("id", user_id).execute()
