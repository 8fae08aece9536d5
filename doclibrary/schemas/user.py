"""User API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from doclibrary.application.dtos.user import UserUpdate


class SignUpRequest(BaseModel):
    """Request body for POST /auth/sign-up."""

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6)


class SignInRequest(BaseModel):
    """Request body for POST /auth/sign-in."""

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    """Tokens for the signed-in user; send access_token as a Bearer token."""

    access_token: str
    token_type: str = "bearer"
    refresh_token: str | None = None
    expires_in: int | None = None
    user_id: str
    email: str | None = None


class UserProfileResponse(BaseModel):
    """Profile row: role and subscription tier."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    role: str | None = None
    subscription_tier: str | None = None


class UserResponse(BaseModel):
    """Admin listing entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str | None = None
    status: str
    subscription_tier: str | None = None
    last_login: datetime | None = None
    created_at: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class UserUpdateRequest(BaseModel):
    """Request body for PATCH /users/{id} (partial). Metadata is merged."""

    role: str | None = None
    status: str | None = None
    subscription_tier: str | None = None
    metadata: dict[str, Any] | None = None

    def to_dto(self) -> UserUpdate:
        return UserUpdate(
            role=self.role,
            status=self.status,
            subscription_tier=self.subscription_tier,
            metadata=self.metadata,
        )


class UserStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_users: int
    active_users: int
    subscribed_users: int
    conversion_rate: float
