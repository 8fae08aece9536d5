"""Pytest configuration and fixtures for doclibrary.

Uses doclibrary.main:app for HTTP tests. The Supabase client is never
initialized here (ASGITransport does not run lifespan); API tests replace
use cases through app.dependency_overrides instead.
"""

import os

# Settings validate SUPABASE_URL / SUPABASE_ANON_KEY at import of doclibrary.main.
os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from doclibrary.api.v1.dependencies import get_session_optional
from doclibrary.application.dtos.user import UserProfile
from doclibrary.application.services.authorization_service import AuthorizationService
from doclibrary.core.limiter import limiter
from doclibrary.main import app
from doclibrary.shared.context import SessionContext
from tests.factories import ADMIN_ID, USER_ID, InMemoryStorage, make_document


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI). Callers start signed out."""
    limiter.reset()
    app.dependency_overrides[get_session_optional] = lambda: None
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def as_user():
    """Override the caller session: as_user("u1") signs in u1; as_user(None) signs out."""

    def _set(user_id: str | None) -> SessionContext | None:
        session = SessionContext(user_id=user_id) if user_id else None
        app.dependency_overrides[get_session_optional] = lambda: session
        return session

    return _set


@pytest.fixture
def admin_ctx() -> SessionContext:
    return SessionContext(user_id=ADMIN_ID, email="admin@test.com")


@pytest.fixture
def user_ctx() -> SessionContext:
    return SessionContext(user_id=USER_ID, email="gold@test.com")


@pytest.fixture
def user_repo() -> AsyncMock:
    """User repository double: ADMIN_ID is an admin, USER_ID a gold subscriber."""
    profiles = {
        ADMIN_ID: UserProfile(id=ADMIN_ID, role="admin", subscription_tier="platinum"),
        USER_ID: UserProfile(id=USER_ID, role="subscriber", subscription_tier="gold"),
    }
    repo = AsyncMock()
    repo.get_profile.side_effect = lambda user_id: profiles.get(user_id)
    return repo


@pytest.fixture
def authorization(user_repo: AsyncMock) -> AuthorizationService:
    return AuthorizationService(user_repo)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def document_factory():
    """Factory fixture for DocumentResult (see tests.factories.make_document)."""
    return make_document
