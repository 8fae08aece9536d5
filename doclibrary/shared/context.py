"""Request-scoped session context.

The authenticated caller is resolved once per request (from the bearer token)
and passed explicitly into each use case that needs it. There is no
process-wide "current user"; a use case only sees the context it is given.

Usage:
    ctx = SessionContext(user_id="u1", email="a@b.c", access_token="...")
    await management.delete_document(ctx, document)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionContext:
    """Immutable snapshot of the signed-in caller for one request."""

    user_id: str
    email: str | None = None
    access_token: str | None = None

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("user_id is required for a session context")
