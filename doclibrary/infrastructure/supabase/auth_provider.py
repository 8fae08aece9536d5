"""Supabase auth (GoTrue) adapter (implements IAuthProvider)."""

from __future__ import annotations

from typing import Any

from doclibrary.application.dtos.user import AuthSession, AuthUser
from doclibrary.domain.exceptions import RemoteException
from doclibrary.infrastructure.supabase._rest_client import SupabaseRESTClient


def _to_user(data: dict[str, Any], email: str | None = None) -> AuthUser:
    if not data.get("id"):
        raise RemoteException("Auth response had no user")
    return AuthUser(id=str(data["id"]), email=data.get("email", email))


class SupabaseAuthProvider:
    def __init__(self, client: SupabaseRESTClient) -> None:
        self._auth = client.auth

    async def get_user(self, access_token: str) -> AuthUser | None:
        data = await self._auth.get_user(access_token)
        if not data or not data.get("id"):
            return None
        return AuthUser(id=str(data["id"]), email=data.get("email"))

    async def sign_up(self, email: str, password: str) -> AuthUser:
        data = await self._auth.sign_up(email, password)
        return _to_user(data, email)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        data = await self._auth.sign_in_with_password(email, password)
        if not data.get("access_token"):
            raise RemoteException("Sign in returned no session")
        return AuthSession(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            user=_to_user(data.get("user") or {}, email),
        )
