"""User administration and registration."""

from __future__ import annotations

import logging

from doclibrary.application.dtos.user import (
    AuthSession,
    UserProfile,
    UserStats,
    UserUpdate,
    UserView,
)
from doclibrary.application.interfaces.repositories import IAuthProvider, IUserRepository
from doclibrary.application.services.authorization_service import AuthorizationService
from doclibrary.domain.enums import SubscriptionTier, UserRole, UserStatus
from doclibrary.domain.exceptions import (
    AuthenticationException,
    DocLibraryException,
    RemoteException,
    ValidationException,
)
from doclibrary.shared.context import SessionContext

logger = logging.getLogger(__name__)


def _validate_update(data: UserUpdate) -> None:
    if data.role is not None and data.role not in UserRole.values():
        raise ValidationException(f"Invalid role: {data.role!r}", field="role")
    if data.status is not None and data.status not in UserStatus.values():
        raise ValidationException(f"Invalid status: {data.status!r}", field="status")
    if (
        data.subscription_tier is not None
        and data.subscription_tier not in SubscriptionTier.values()
    ):
        raise ValidationException(
            f"Invalid subscription tier: {data.subscription_tier!r}",
            field="subscription_tier",
        )


class UserAdminService:
    """Admin user management plus self-service sign up and sign in."""

    def __init__(
        self,
        user_repo: IUserRepository,
        auth: IAuthProvider,
        authorization: AuthorizationService,
    ) -> None:
        self.user_repo = user_repo
        self.auth = auth
        self.authorization = authorization

    async def sign_up(self, email: str, password: str) -> UserProfile:
        """Create the auth user and its profile row (role guest, no tier)."""
        if not email or "@" not in email:
            raise ValidationException("A valid email is required", field="email")
        if not password:
            raise ValidationException("Password is required", field="password")
        user = await self.auth.sign_up(email, password)
        try:
            profile = await self.user_repo.create_profile(user.id, UserRole.GUEST.value)
        except DocLibraryException as e:
            logger.error("Error creating user profile for %s: %s", user.id, e.message)
            raise
        logger.info("Signed up user %s", user.id)
        return profile

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session. Rejected credentials raise AuthenticationException."""
        if not email or not password:
            raise ValidationException("Email and password are required")
        try:
            return await self.auth.sign_in(email, password)
        except RemoteException as e:
            if e.status_code in (400, 401):
                logger.info("Sign in rejected for %s", email)
                raise AuthenticationException("Invalid login credentials") from e
            raise

    async def fetch_users(self, ctx: SessionContext | None) -> list[UserView]:
        await self.authorization.require_admin(ctx, "user", "view")
        try:
            return await self.user_repo.list_users()
        except DocLibraryException as e:
            logger.error("Error fetching users: %s", e.message)
            raise

    async def update_user(
        self, ctx: SessionContext | None, user_id: str, data: UserUpdate
    ) -> None:
        await self.authorization.require_admin(ctx, "user", "update")
        _validate_update(data)
        await self.user_repo.update_user(user_id, data)

    async def delete_user(self, ctx: SessionContext | None, user_id: str) -> None:
        """Delete a profile row. Admins cannot delete their own profile."""
        ctx = await self.authorization.require_admin(ctx, "user", "delete")
        if ctx.user_id == user_id:
            raise ValidationException("Administrators cannot delete themselves", field="id")
        await self.user_repo.delete_user(user_id)
        logger.info("User %s deleted by %s", user_id, ctx.user_id)

    async def get_user_stats(self, ctx: SessionContext | None) -> UserStats:
        """Totals over profile rows; conversion rate is the subscribed percentage."""
        await self.authorization.require_admin(ctx, "user", "view")
        rows = await self.user_repo.list_profiles()
        active = [
            r for r in rows if (r.get("status") or UserStatus.ACTIVE.value) == UserStatus.ACTIVE.value
        ]
        subscribed = [r for r in rows if r.get("subscription_tier")]
        return UserStats(
            total_users=len(rows),
            active_users=len(active),
            subscribed_users=len(subscribed),
            conversion_rate=(len(subscribed) / len(rows)) * 100 if rows else 0.0,
        )
