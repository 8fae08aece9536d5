"""Authorization service: role checks against the users profile table."""

from __future__ import annotations

from doclibrary.application.interfaces.repositories import IUserRepository
from doclibrary.domain.enums import UserRole
from doclibrary.domain.exceptions import AuthenticationException, AuthorizationException
from doclibrary.shared.context import SessionContext


class AuthorizationService:
    """Centralized role checking. The role is read fresh on every call (never cached)."""

    def __init__(self, user_repo: IUserRepository) -> None:
        self.user_repo = user_repo

    async def get_role(self, user_id: str) -> str | None:
        """Return the stored role for user_id, or None if the user has no profile."""
        profile = await self.user_repo.get_profile(user_id)
        return profile.role if profile else None

    async def get_subscription_tier(self, user_id: str) -> str | None:
        """Return the stored subscription tier for user_id, or None."""
        profile = await self.user_repo.get_profile(user_id)
        return profile.subscription_tier if profile else None

    async def is_admin(self, user_id: str) -> bool:
        return await self.get_role(user_id) == UserRole.ADMIN.value

    async def require_admin(
        self,
        ctx: SessionContext | None,
        resource: str,
        action: str,
    ) -> SessionContext:
        """Return ctx if the caller is signed in and holds the admin role.

        Raises:
            AuthenticationException: No signed-in user.
            AuthorizationException: Signed in but not an administrator.
        """
        if ctx is None:
            raise AuthenticationException()
        if not await self.is_admin(ctx.user_id):
            raise AuthorizationException(resource=resource, action=action)
        return ctx
