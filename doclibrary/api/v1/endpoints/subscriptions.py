"""Subscription admin API."""

from fastapi import APIRouter, Depends, Request

from doclibrary.api.v1.dependencies import (
    OptionalSession,
    get_subscription_admin_service,
)
from doclibrary.application.use_cases.subscriptions import SubscriptionAdminService
from doclibrary.core.limiter import limit_writes
from doclibrary.schemas.subscription import (
    SubscriptionResponse,
    SubscriptionStatsResponse,
    SubscriptionUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[SubscriptionResponse])
async def list_subscriptions(
    session: OptionalSession,
    admin: SubscriptionAdminService = Depends(get_subscription_admin_service),
):
    subscriptions = await admin.fetch_subscriptions(session)
    return [SubscriptionResponse.model_validate(s) for s in subscriptions]


@router.get("/stats", response_model=SubscriptionStatsResponse)
async def subscription_stats(
    session: OptionalSession,
    admin: SubscriptionAdminService = Depends(get_subscription_admin_service),
):
    stats = await admin.get_subscription_stats(session)
    return SubscriptionStatsResponse.model_validate(stats)


@router.patch("/{subscription_id}", status_code=204)
@limit_writes
async def update_subscription(
    request: Request,
    subscription_id: str,
    body: SubscriptionUpdateRequest,
    session: OptionalSession,
    admin: SubscriptionAdminService = Depends(get_subscription_admin_service),
):
    """Partial update of status, auto_renew, or amount."""
    await admin.update_subscription(session, subscription_id, body.to_dto())


@router.post("/{subscription_id}/cancel", status_code=204)
@limit_writes
async def cancel_subscription(
    request: Request,
    subscription_id: str,
    session: OptionalSession,
    admin: SubscriptionAdminService = Depends(get_subscription_admin_service),
):
    await admin.cancel_subscription(session, subscription_id)
