"""DTOs for user use cases."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuthUser:
    """User as known to the auth service (id and email only)."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class AuthSession:
    """Tokens issued by the auth service on sign in."""

    access_token: str
    refresh_token: str | None
    expires_in: int | None
    user: AuthUser


@dataclass(frozen=True)
class UserProfile:
    """Application profile row: role and subscription tier."""

    id: str
    role: str | None
    subscription_tier: str | None


@dataclass(frozen=True)
class UserView:
    """Admin listing projection (profile joined with auth data)."""

    id: str
    name: str
    email: str
    role: str | None
    status: str
    subscription_tier: str | None
    last_login: datetime | None
    created_at: datetime | None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UserUpdate:
    """Admin edit of a user; unset fields are left unchanged."""

    role: str | None = None
    status: str | None = None
    subscription_tier: str | None = None
    metadata: dict[str, Any] | None = None


@dataclass(frozen=True)
class UserStats:
    total_users: int
    active_users: int
    subscribed_users: int
    conversion_rate: float
