"""Supabase Storage for document files (implements IDocumentStorage)."""

from __future__ import annotations

from urllib.parse import unquote, urlsplit

from doclibrary.application.dtos.document import StoredObject
from doclibrary.core.constants import STORAGE_CACHE_CONTROL
from doclibrary.domain.exceptions import InvalidURLException
from doclibrary.infrastructure.supabase._rest_client import (
    PUBLIC_OBJECT_PREFIX,
    SupabaseRESTClient,
)


def parse_object_url(file_url: str) -> StoredObject:
    """Split a file URL into bucket and object path.

    Accepts Supabase public URLs (``/storage/v1/object/public/<bucket>/<path>``)
    and bare ``/<bucket>/<path>`` URLs. At least two path segments are required.
    """
    path = unquote(urlsplit(file_url).path)
    if path.startswith(PUBLIC_OBJECT_PREFIX):
        path = path[len(PUBLIC_OBJECT_PREFIX):]
    bucket, _, object_path = path.lstrip("/").partition("/")
    if not bucket or not object_path:
        raise InvalidURLException(file_url)
    return StoredObject(bucket=bucket, path=object_path)


class SupabaseDocumentStorage:
    def __init__(self, client: SupabaseRESTClient) -> None:
        self._storage = client.storage

    async def upload(
        self, bucket: str, path: str, data: bytes, content_type: str
    ) -> str:
        return await self._storage.from_(bucket).upload(
            path,
            data,
            content_type,
            cache_control=STORAGE_CACHE_CONTROL,
            upsert=False,
        )

    def public_url(self, bucket: str, path: str) -> str:
        return self._storage.from_(bucket).get_public_url(path)

    def locate(self, file_url: str) -> StoredObject:
        return parse_object_url(file_url)

    async def remove(self, bucket: str, path: str) -> None:
        await self._storage.from_(bucket).remove([path])
