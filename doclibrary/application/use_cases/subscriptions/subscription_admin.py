"""Subscription administration: listing, edits, cancellation, and statistics (admin-only)."""

from __future__ import annotations

import logging
from typing import Any

from doclibrary.application.dtos.subscription import (
    SubscriptionStats,
    SubscriptionUpdate,
    SubscriptionView,
    subscription_amount,
)
from doclibrary.application.interfaces.repositories import ISubscriptionRepository
from doclibrary.application.services.authorization_service import AuthorizationService
from doclibrary.domain.enums import SubscriptionStatus
from doclibrary.domain.exceptions import DocLibraryException, ValidationException
from doclibrary.shared.context import SessionContext

logger = logging.getLogger(__name__)


class SubscriptionAdminService:
    def __init__(
        self,
        subscription_repo: ISubscriptionRepository,
        authorization: AuthorizationService,
    ) -> None:
        self.subscription_repo = subscription_repo
        self.authorization = authorization

    async def fetch_subscriptions(
        self, ctx: SessionContext | None
    ) -> list[SubscriptionView]:
        await self.authorization.require_admin(ctx, "subscription", "view")
        try:
            return await self.subscription_repo.list_views()
        except DocLibraryException as e:
            logger.error("Error fetching subscriptions: %s", e.message)
            raise

    async def update_subscription(
        self,
        ctx: SessionContext | None,
        subscription_id: str,
        data: SubscriptionUpdate,
    ) -> None:
        """Apply only the fields set on data. auto_renew also sets cancel_at_period_end."""
        await self.authorization.require_admin(ctx, "subscription", "update")
        values: dict[str, Any] = {}
        if data.status is not None:
            if data.status not in SubscriptionStatus.values():
                raise ValidationException(
                    f"Invalid subscription status: {data.status!r}", field="status"
                )
            values["status"] = data.status
        if data.auto_renew is not None:
            values["auto_renew"] = data.auto_renew
            values["cancel_at_period_end"] = not data.auto_renew
        if data.amount is not None:
            if data.amount < 0:
                raise ValidationException("Amount must not be negative", field="amount")
            values["amount"] = data.amount
        if not values:
            raise ValidationException("No subscription fields to update")
        await self.subscription_repo.update(subscription_id, values)

    async def cancel_subscription(
        self, ctx: SessionContext | None, subscription_id: str
    ) -> None:
        """Set status inactive and stop renewal at the end of the current period."""
        ctx = await self.authorization.require_admin(ctx, "subscription", "cancel")
        await self.subscription_repo.update(
            subscription_id,
            {
                "status": SubscriptionStatus.INACTIVE.value,
                "auto_renew": False,
                "cancel_at_period_end": True,
            },
        )
        logger.info("Subscription %s cancelled by %s", subscription_id, ctx.user_id)

    async def get_subscription_stats(
        self, ctx: SessionContext | None
    ) -> SubscriptionStats:
        """Counts, plus revenue over active subscriptions."""
        await self.authorization.require_admin(ctx, "subscription", "view")
        rows = await self.subscription_repo.list_rows()
        active = [r for r in rows if r.get("status") == SubscriptionStatus.ACTIVE.value]
        revenue = sum(subscription_amount(r) for r in active)
        return SubscriptionStats(
            total_subscriptions=len(rows),
            active_subscriptions=len(active),
            total_revenue=revenue,
            average_revenue=revenue / (len(active) or 1),
        )
