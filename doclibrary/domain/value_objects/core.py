"""Domain value objects for subscriptions and payments.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from doclibrary.core.constants import MOBILE_NUMBER_PATTERN
from doclibrary.domain.enums import MobileMoneyProvider, SubscriptionTier
from doclibrary.domain.exceptions import ValidationException

_MOBILE_NUMBER_RE = re.compile(MOBILE_NUMBER_PATTERN)

# Plan duration label (lowercased) -> length of the subscription period.
_DURATIONS: dict[str, timedelta] = {
    "1 day": timedelta(days=1),
    "per year": timedelta(days=365),
}
DEFAULT_DURATION = timedelta(days=30)


def duration_for(label: str) -> timedelta:
    """Return the subscription period for a plan duration label.

    Matching is exact on the label, ignoring case; unknown labels get 30 days.
    """
    return _DURATIONS.get(label.lower(), DEFAULT_DURATION)


def compute_end_date(start: datetime, label: str) -> datetime:
    """Return start + duration_for(label)."""
    return start + duration_for(label)


@dataclass(frozen=True)
class Plan:
    """Subscription plan being purchased (e.g. Gold, 50.0, 'per year').

    The plan name, lowercased, is the tier written to the user row.
    """

    name: str
    price: float
    duration: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationException("Plan name is required", field="plan.name")
        if self.price < 0:
            raise ValidationException("Plan price must not be negative", field="plan.price")

    @property
    def slug(self) -> str:
        return self.name.strip().lower()

    @property
    def tier(self) -> SubscriptionTier:
        """Tier granted by this plan. Raises ValidationException for non-tier plans."""
        try:
            return SubscriptionTier(self.slug)
        except ValueError as e:
            raise ValidationException(
                f"Plan {self.name!r} does not map to a subscription tier",
                field="plan.name",
            ) from e


@dataclass(frozen=True)
class MobileMoneyPayer:
    """Phone number and network for a mobile money payment, validated locally."""

    phone_number: str
    provider: MobileMoneyProvider

    @classmethod
    def parse(cls, phone_number: str | None, provider: str | None) -> "MobileMoneyPayer":
        """Validate raw input. Raises ValidationException before any network call."""
        if not phone_number or not provider:
            raise ValidationException(
                "Please provide mobile number and select provider", field="mobile"
            )
        if not _MOBILE_NUMBER_RE.fullmatch(phone_number):
            raise ValidationException(
                "Please enter a valid 10-digit mobile number", field="phone_number"
            )
        try:
            network = MobileMoneyProvider(provider.lower())
        except ValueError as e:
            raise ValidationException(
                f"Unsupported mobile money provider: {provider!r}", field="provider"
            ) from e
        return cls(phone_number=phone_number, provider=network)
