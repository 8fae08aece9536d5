"""Supabase-backed document repository (implements IDocumentRepository)."""

from __future__ import annotations

from typing import Any

from doclibrary.application.dtos.document import (
    DocumentCreate,
    DocumentResult,
    DocumentVersionResult,
)
from doclibrary.domain.value_objects.query import DocumentFilter, DocumentSort
from doclibrary.infrastructure.supabase._rest_client import SupabaseRESTClient
from doclibrary.infrastructure.supabase.repositories._projection import first_row
from doclibrary.infrastructure.supabase.tables import (
    TABLE_DOCUMENT_VERSIONS,
    TABLE_DOCUMENTS,
)
from doclibrary.shared.utils.datetime import parse_timestamp, to_iso, utc_now


def metadata_path(key: str) -> str:
    """PostgREST JSON path selecting metadata.<key> as text."""
    return f"metadata->>{key}"


def metadata_order_path(key: str) -> str:
    """PostgREST JSON path selecting metadata.<key> as jsonb, so numbers order numerically."""
    return f"metadata->{key}"


class SupabaseDocumentRepository:
    """Document repository over the documents table.

    Filters and ordering run in the database; keyword matching is left to the
    caller (DocumentFilter.matches_keywords).
    """

    def __init__(self, client: SupabaseRESTClient) -> None:
        self._client = client
        self._table = client.table(TABLE_DOCUMENTS)

    def _to_result(self, row: dict[str, Any]) -> DocumentResult:
        return DocumentResult(
            id=str(row["id"]),
            title=row.get("title") or "",
            category=row.get("category") or "",
            subcategory=row.get("subcategory") or "",
            file_url=row.get("file_url") or "",
            user_id=row.get("user_id"),
            metadata=row.get("metadata") or {},
            created_at=parse_timestamp(row.get("created_at")),
            updated_at=parse_timestamp(row.get("updated_at")),
        )

    async def list_documents(
        self,
        filters: DocumentFilter,
        sort: DocumentSort,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[DocumentResult]:
        """Return documents matching every option of filters except keywords."""
        q = self._table.select()
        if filters.category:
            q = q.eq("category", filters.category)
        if filters.subcategory:
            q = q.eq("subcategory", filters.subcategory)
        if filters.status:
            q = q.eq(metadata_path("status"), filters.status)
        if filters.date_range:
            if filters.date_range.start:
                q = q.gte("created_at", to_iso(filters.date_range.start))
            if filters.date_range.end:
                q = q.lte("created_at", to_iso(filters.date_range.end))
        if filters.types:
            q = q.in_(metadata_path("type"), filters.types)

        column = metadata_order_path(sort.metadata_key) if sort.is_metadata_field else sort.field
        q = q.order(column, ascending=sort.ascending)
        if limit is not None:
            q = q.limit(limit)
        if offset:
            q = q.offset(offset)
        rows = await q.execute()
        return [self._to_result(r) for r in rows]

    async def get_by_id(self, document_id: str) -> DocumentResult | None:
        """Return document by ID."""
        row = await self._table.select().eq("id", document_id).single().execute()
        return self._to_result(row) if row else None

    async def create(self, data: DocumentCreate) -> DocumentResult:
        """Insert a document row; the store assigns id and timestamps."""
        rows = await self._table.insert(
            {
                "title": data.title,
                "category": data.category,
                "subcategory": data.subcategory,
                "file_url": data.file_url,
                "user_id": data.user_id,
                "metadata": data.metadata,
            }
        ).execute()
        row = first_row(rows)
        if row is None:
            raise RuntimeError("Insert into documents returned no row")
        return self._to_result(row)

    async def update(
        self, document_id: str, values: dict[str, Any]
    ) -> DocumentResult | None:
        payload = {**values, "updated_at": to_iso(utc_now())}
        rows = await self._table.update(payload).eq("id", document_id).execute()
        row = first_row(rows)
        return self._to_result(row) if row else None

    async def delete(self, document_id: str) -> None:
        await self._table.delete().eq("id", document_id).execute()

    async def get_versions(self, document_id: str) -> list[DocumentVersionResult]:
        """Return version rows for document (newest first)."""
        rows = await (
            self._client.table(TABLE_DOCUMENT_VERSIONS)
            .select()
            .eq("document_id", document_id)
            .order("created_at", ascending=False)
            .execute()
        )
        return [
            DocumentVersionResult(
                id=str(r["id"]),
                document_id=str(r.get("document_id") or document_id),
                version=r.get("version"),
                file_url=r.get("file_url"),
                created_by=r.get("created_by"),
                created_at=parse_timestamp(r.get("created_at")),
                metadata=r.get("metadata") or {},
            )
            for r in rows
        ]
