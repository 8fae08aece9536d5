"""Checkout API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from doclibrary.domain.value_objects import Plan


class PlanRequest(BaseModel):
    """Plan being purchased: display name, price, and duration label."""

    name: str = Field(..., min_length=1, max_length=64)
    price: float = Field(..., ge=0)
    duration: str = Field(default="", max_length=64, description="e.g. '1 Day', 'Per Year'")

    def to_plan(self) -> Plan:
        return Plan(name=self.name, price=self.price, duration=self.duration)


class CardCheckoutRequest(BaseModel):
    """Request body for POST /checkout/card."""

    plan: PlanRequest
    payment_method_id: str = Field(..., min_length=1, description="Card payment method token")


class MobileMoneyCheckoutRequest(BaseModel):
    """Request body for POST /checkout/mobile-money. Number and provider are validated server-side."""

    plan: PlanRequest
    phone_number: str | None = None
    provider: str | None = None


class SubscriptionRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    plan: str
    status: str
    start_date: datetime | None = None
    end_date: datetime | None = None
    amount: float
    currency: str
    auto_renew: bool
    metadata: dict[str, Any] = Field(default_factory=dict)


class CheckoutResponse(BaseModel):
    """Result of a checkout: the new subscription and whether the tier was changed."""

    model_config = ConfigDict(from_attributes=True)

    subscription: SubscriptionRecord
    payment_method: str
    tier_updated: bool
    transaction_id: str | None = None


class CheckoutConfigResponse(BaseModel):
    """Client-side payment configuration (publishable key and currency)."""

    public_key: str
    currency: str
