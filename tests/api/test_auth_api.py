"""Sign-up and sign-in endpoint tests."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from doclibrary.api.v1.dependencies import (
    get_document_management_service,
    get_session_optional,
    get_user_admin_service,
)
from doclibrary.api.v1.dependencies.supabase import get_auth_provider
from doclibrary.application.dtos.user import AuthSession, AuthUser, UserProfile
from doclibrary.application.use_cases.users import UserAdminService
from doclibrary.domain.exceptions import RemoteException
from doclibrary.main import app


@pytest.fixture
def auth() -> AsyncMock:
    provider = AsyncMock()
    provider.sign_up.return_value = AuthUser(id="new-1", email="new@test.com")
    provider.sign_in.return_value = AuthSession(
        access_token="jwt-token",
        refresh_token="refresh",
        expires_in=3600,
        user=AuthUser(id="new-1", email="new@test.com"),
    )
    return provider


@pytest.fixture
def users(user_repo, auth, authorization) -> UserAdminService:
    user_repo.create_profile.return_value = UserProfile(
        id="new-1", role="guest", subscription_tier=None
    )
    svc = UserAdminService(user_repo, auth, authorization)
    app.dependency_overrides[get_user_admin_service] = lambda: svc
    return svc


async def test_sign_up_creates_guest(client: AsyncClient, users, user_repo) -> None:
    response = await client.post(
        "/api/v1/auth/sign-up", json={"email": "new@test.com", "password": "secret1"}
    )
    assert response.status_code == 201
    assert response.json() == {"id": "new-1", "role": "guest", "subscription_tier": None}
    user_repo.create_profile.assert_awaited_once_with("new-1", "guest")


async def test_sign_up_short_password_is_422(client: AsyncClient, users, auth) -> None:
    response = await client.post(
        "/api/v1/auth/sign-up", json={"email": "new@test.com", "password": "123"}
    )
    assert response.status_code == 422
    auth.sign_up.assert_not_awaited()


async def test_sign_in_returns_bearer_token(client: AsyncClient, users) -> None:
    response = await client.post(
        "/api/v1/auth/sign-in", json={"email": "new@test.com", "password": "secret1"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["access_token"] == "jwt-token"
    assert body["token_type"] == "bearer"
    assert body["user_id"] == "new-1"


async def test_sign_in_wrong_password_is_401(client: AsyncClient, users, auth) -> None:
    auth.sign_in.side_effect = RemoteException("Invalid login credentials", status_code=400)
    response = await client.post(
        "/api/v1/auth/sign-in", json={"email": "new@test.com", "password": "nope"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_sign_up_is_rate_limited(client: AsyncClient, users) -> None:
    body = {"email": "new@test.com", "password": "secret1"}
    statuses = [
        (await client.post("/api/v1/auth/sign-up", json=body)).status_code for _ in range(11)
    ]
    assert statuses[:10] == [201] * 10
    assert statuses[10] == 429


async def test_bearer_token_resolves_session(client: AsyncClient, auth) -> None:
    """A valid bearer token becomes the SessionContext handed to use cases."""
    auth.get_user.side_effect = lambda token: (
        AuthUser(id="u-9", email="u9@test.com") if token == "good" else None
    )
    management = AsyncMock()
    management.check_document_access.return_value = True
    app.dependency_overrides.pop(get_session_optional, None)
    app.dependency_overrides[get_auth_provider] = lambda: auth
    app.dependency_overrides[get_document_management_service] = lambda: management

    await client.get(
        "/api/v1/documents/doc-1/access", headers={"Authorization": "Bearer good"}
    )
    ctx, _ = management.check_document_access.await_args.args
    assert (ctx.user_id, ctx.email, ctx.access_token) == ("u-9", "u9@test.com", "good")

    await client.get(
        "/api/v1/documents/doc-1/access", headers={"Authorization": "Bearer stale"}
    )
    ctx, _ = management.check_document_access.await_args.args
    assert ctx is None
