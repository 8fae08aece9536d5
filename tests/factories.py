"""Test doubles and builders shared by unit and API tests."""

import os
from datetime import UTC, datetime
from typing import Any

from doclibrary.application.dtos.document import DocumentResult, StoredObject
from doclibrary.domain.exceptions import RemoteException
from doclibrary.infrastructure.supabase.repositories.document_storage_supabase import (
    parse_object_url,
)

SUPABASE_URL = os.environ.get("SUPABASE_URL", "http://supabase.test")
ADMIN_ID = "admin-1"
USER_ID = "user-1"


class InMemoryStorage:
    """Document storage double keeping objects in a dict keyed by (bucket, path)."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.fail_remove = False

    async def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        self.objects[(bucket, path)] = data
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{SUPABASE_URL}/storage/v1/object/public/{bucket}/{path}"

    def locate(self, file_url: str) -> StoredObject:
        return parse_object_url(file_url)

    async def remove(self, bucket: str, path: str) -> None:
        if self.fail_remove:
            raise RemoteException("storage unavailable", status_code=503)
        self.objects.pop((bucket, path), None)


def make_document(**overrides: Any) -> DocumentResult:
    """Build a DocumentResult with sensible defaults."""
    values: dict[str, Any] = {
        "id": "doc-1",
        "title": "Budget Speech",
        "category": "Hansards",
        "subcategory": "2024",
        "file_url": f"{SUPABASE_URL}/storage/v1/object/public/hansards/2024/budget.pdf",
        "user_id": ADMIN_ID,
        "metadata": {"status": "active", "type": "application/pdf"},
        "created_at": datetime(2024, 3, 1, tzinfo=UTC),
        "updated_at": None,
    }
    values.update(overrides)
    return DocumentResult(**values)
