"""DTOs for subscription use cases."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class SubscriptionCreate:
    """Subscription row written by checkout."""

    user_id: str
    plan: str
    status: str
    start_date: datetime
    end_date: datetime
    amount: float
    currency: str
    auto_renew: bool
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SubscriptionResult:
    """Subscription read-model as stored."""

    id: str
    user_id: str
    plan: str
    status: str
    start_date: datetime | None
    end_date: datetime | None
    amount: float
    currency: str
    auto_renew: bool
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SubscriptionView:
    """Admin listing projection (subscription joined with user and payment method)."""

    id: str
    user_id: str
    user_name: str
    user_email: str
    plan: str
    status: str
    start_date: datetime | None
    end_date: datetime | None
    last_payment: datetime | None
    amount: float
    auto_renew: bool
    payment_method: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SubscriptionUpdate:
    """Admin edit of a subscription; unset fields are left unchanged."""

    status: str | None = None
    auto_renew: bool | None = None
    amount: float | None = None


@dataclass(frozen=True)
class SubscriptionStats:
    total_subscriptions: int
    active_subscriptions: int
    total_revenue: float
    average_revenue: float


def subscription_amount(row: dict[str, Any]) -> float:
    """Amount of a stored subscription row (column, else metadata.amount, else 0)."""
    amount = row.get("amount")
    if amount is None:
        amount = (row.get("metadata") or {}).get("amount")
    return float(amount or 0)
