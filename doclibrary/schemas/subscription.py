"""Subscription admin API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from doclibrary.application.dtos.subscription import SubscriptionUpdate


class SubscriptionResponse(BaseModel):
    """Subscription joined with user and payment method."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    user_name: str
    user_email: str
    plan: str
    status: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    last_payment: datetime | None = None
    amount: float
    auto_renew: bool
    payment_method: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class SubscriptionUpdateRequest(BaseModel):
    """Request body for PATCH /subscriptions/{id} (partial)."""

    status: str | None = None
    auto_renew: bool | None = None
    amount: float | None = None

    def to_dto(self) -> SubscriptionUpdate:
        return SubscriptionUpdate(
            status=self.status, auto_renew=self.auto_renew, amount=self.amount
        )


class SubscriptionStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_subscriptions: int
    active_subscriptions: int
    total_revenue: float
    average_revenue: float
