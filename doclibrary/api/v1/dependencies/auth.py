"""Caller identity: bearer token -> SessionContext, plus role checks."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from doclibrary.application.services.authorization_service import AuthorizationService
from doclibrary.domain.exceptions import AuthenticationException
from doclibrary.infrastructure.supabase.auth_provider import SupabaseAuthProvider
from doclibrary.infrastructure.supabase.repositories import SupabaseUserRepository
from doclibrary.shared.context import SessionContext

from .supabase import get_auth_provider, get_user_repo

_http_bearer = HTTPBearer(auto_error=False)


async def get_session_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    auth: Annotated[SupabaseAuthProvider, Depends(get_auth_provider)],
) -> SessionContext | None:
    """Return the caller's session if a valid access token is present; else None."""
    if not credentials:
        return None
    user = await auth.get_user(credentials.credentials)
    if user is None:
        return None
    return SessionContext(
        user_id=user.id,
        email=user.email,
        access_token=credentials.credentials,
    )


async def get_session(
    session: Annotated[SessionContext | None, Depends(get_session_optional)],
) -> SessionContext:
    """Return the caller's session; raise 401 if missing or invalid."""
    if session is None:
        raise AuthenticationException()
    return session


def get_authorization_service(
    user_repo: Annotated[SupabaseUserRepository, Depends(get_user_repo)],
) -> AuthorizationService:
    return AuthorizationService(user_repo)


OptionalSession = Annotated[SessionContext | None, Depends(get_session_optional)]
Session = Annotated[SessionContext, Depends(get_session)]
