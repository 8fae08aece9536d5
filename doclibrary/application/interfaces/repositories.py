"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain value objects only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from doclibrary.application.dtos.document import (
        DocumentCreate,
        DocumentResult,
        DocumentVersionResult,
        StoredObject,
    )
    from doclibrary.application.dtos.payment import PaymentView
    from doclibrary.application.dtos.subscription import (
        SubscriptionCreate,
        SubscriptionResult,
        SubscriptionView,
    )
    from doclibrary.application.dtos.user import (
        AuthSession,
        AuthUser,
        UserProfile,
        UserUpdate,
        UserView,
    )
    from doclibrary.domain.value_objects.query import DocumentFilter, DocumentSort


# Document repository interface
class IDocumentRepository(Protocol):
    """Protocol for the documents table (DIP)."""

    async def list_documents(
        self,
        filters: DocumentFilter,
        sort: DocumentSort,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[DocumentResult]:
        """Return documents matching every filter option except keywords, ordered by sort.

        No limit means all matching rows.
        """

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by ID."""

    async def create(self, data: DocumentCreate) -> DocumentResult:
        """Insert a document row; return it as stored."""

    async def update(
        self, document_id: str, values: dict[str, Any]
    ) -> DocumentResult | None:
        """Update columns of one document; return the updated row or None if missing."""

    async def delete(self, document_id: str) -> None:
        """Delete one document row."""

    async def get_versions(self, document_id: str) -> list[DocumentVersionResult]:
        """Return version history rows for document (newest first)."""


# Document storage interface
class IDocumentStorage(Protocol):
    """Protocol for object storage holding document files (one bucket per category)."""

    async def upload(
        self, bucket: str, path: str, data: bytes, content_type: str
    ) -> str:
        """Store bytes at bucket/path without overwriting; return the path.

        Raises UploadException when the upload fails or the path already exists.
        """

    def public_url(self, bucket: str, path: str) -> str:
        """Return the public URL of bucket/path."""

    def locate(self, file_url: str) -> StoredObject:
        """Parse a public file URL into bucket and path. Raises InvalidURLException."""

    async def remove(self, bucket: str, path: str) -> None:
        """Delete the object at bucket/path."""


# User profile repository interface
class IUserRepository(Protocol):
    """Protocol for the users profile table (role and subscription tier)."""

    async def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the profile row for user_id (always read fresh)."""

    async def create_profile(
        self, user_id: str, role: str, subscription_tier: str | None = None
    ) -> UserProfile:
        """Insert a profile row; return it."""

    async def set_subscription_tier(self, user_id: str, tier: str | None) -> None:
        """Set the user's subscription tier (None clears it)."""

    async def list_users(self) -> list[UserView]:
        """Return every user with auth data joined (admin listing)."""

    async def list_profiles(self) -> list[dict[str, Any]]:
        """Return raw profile rows (for statistics)."""

    async def update_user(self, user_id: str, data: UserUpdate) -> None:
        """Apply an admin edit to a profile row."""

    async def delete_user(self, user_id: str) -> None:
        """Delete a profile row."""


# Subscription repository interface
class ISubscriptionRepository(Protocol):
    """Protocol for the subscriptions table."""

    async def create(self, data: SubscriptionCreate) -> SubscriptionResult:
        """Insert a subscription row; return it as stored."""

    async def delete(self, subscription_id: str) -> None:
        """Delete a subscription row."""

    async def list_views(self) -> list[SubscriptionView]:
        """Return subscriptions joined with user and payment method (newest first)."""

    async def list_rows(self) -> list[dict[str, Any]]:
        """Return raw subscription rows (for statistics)."""

    async def update(self, subscription_id: str, values: dict[str, Any]) -> None:
        """Update columns of one subscription."""


# Payment repository interface
class IPaymentRepository(Protocol):
    """Protocol for the payments table (reporting projection plus status updates)."""

    async def list_views(self) -> list[PaymentView]:
        """Return payments joined with user and payment method (newest first)."""

    async def list_rows(self) -> list[dict[str, Any]]:
        """Return raw payment rows (for statistics)."""

    async def get_metadata(self, payment_id: str) -> dict[str, Any] | None:
        """Return the stored metadata of a payment, or None if the payment is missing."""

    async def update(self, payment_id: str, values: dict[str, Any]) -> None:
        """Update columns of one payment."""


# Search log repository interface
class ISearchLogRepository(Protocol):
    """Protocol for the search_logs table."""

    async def insert(
        self,
        search_term: str,
        user_id: str | None,
        results_count: int,
        search_time: float,
    ) -> None:
        """Record one search."""


# Auth provider interface
class IAuthProvider(Protocol):
    """Protocol for the hosted auth service."""

    async def get_user(self, access_token: str) -> AuthUser | None:
        """Resolve an access token to its user; None when invalid or expired."""

    async def sign_up(self, email: str, password: str) -> AuthUser:
        """Create an auth user."""

    async def sign_in(self, email: str, password: str) -> AuthSession:
        """Exchange email/password for a session."""
