"""DTOs for payment reporting and checkout."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from doclibrary.application.dtos.subscription import SubscriptionResult


@dataclass(frozen=True)
class PaymentView:
    """Reporting projection of a payment joined with its user and payment method."""

    id: str
    user_id: str
    user_name: str
    user_email: str
    amount: float
    currency: str
    status: str
    type: str
    payment_method: str
    date: datetime | None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentStats:
    total_revenue: float
    success_rate: float
    average_amount: float
    refund_rate: float


@dataclass(frozen=True)
class PaymentIntent:
    """Payment intent created by the payment backend for a card payment."""

    client_secret: str


@dataclass(frozen=True)
class MobileMoneyInitiation:
    """Response of the mobile money initiation endpoint."""

    transaction_id: str | None
    status: str


@dataclass(frozen=True)
class CheckoutResult:
    """Outcome of a checkout attempt."""

    subscription: SubscriptionResult
    payment_method: str
    tier_updated: bool
    transaction_id: str | None = None
