"""Domain enumerations for the document library.

Enums represent fixed sets of domain values (tiers, access levels, statuses).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class SubscriptionTier(_ValuesMixin, str, Enum):
    """Subscription level; each tier reaches every access level of the tiers below it."""

    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class AccessLevel(_ValuesMixin, str, Enum):
    """Document-side classification gating visibility by tier."""

    PUBLIC = "public"
    BASIC = "basic"
    PREMIUM = "premium"
    EXCLUSIVE = "exclusive"


class DocumentStatus(_ValuesMixin, str, Enum):
    """Document lifecycle status stored in metadata.status."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    DRAFT = "draft"


class UserRole(_ValuesMixin, str, Enum):
    """Role stored on the users table."""

    ADMIN = "admin"
    SUBSCRIBER = "subscriber"
    GUEST = "guest"


class SubscriptionStatus(_ValuesMixin, str, Enum):
    """Subscription row status."""

    ACTIVE = "active"
    PENDING = "pending"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    EXPIRED = "expired"
    REFUNDED = "refunded"


class PaymentStatus(_ValuesMixin, str, Enum):
    """Payment row status."""

    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentType(_ValuesMixin, str, Enum):
    """Payment kind, read from payments.metadata.type."""

    SUBSCRIPTION = "subscription"
    ONE_TIME = "one-time"
    REFUND = "refund"


class PaymentMethod(_ValuesMixin, str, Enum):
    """How a payment or subscription was paid."""

    CARD = "card"
    MOBILE_MONEY = "mobile_money"
    BANK_TRANSFER = "bank_transfer"


class MobileMoneyProvider(_ValuesMixin, str, Enum):
    """Supported mobile money networks."""

    MTN = "mtn"
    AIRTEL = "airtel"


class UserStatus(_ValuesMixin, str, Enum):
    """Account status stored on the users table."""

    ACTIVE = "active"
    INACTIVE = "inactive"
