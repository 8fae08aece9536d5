"""DTOs for document use cases (no dependency on the table API)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class FileUpload:
    """File handed to the upload pipeline (name, bytes, browser lastModified in epoch ms)."""

    filename: str
    data: bytes
    last_modified: int | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[-1].lower()


@dataclass(frozen=True)
class DocumentCreate:
    """Input for creating a document record (write-model). Use case builds this; repo persists and returns DocumentResult."""

    title: str
    category: str
    subcategory: str
    file_url: str
    user_id: str
    metadata: dict[str, Any]


@dataclass(frozen=True)
class DocumentResult:
    """Document read-model (result of get_by_id, list, create)."""

    id: str
    title: str
    category: str
    subcategory: str
    file_url: str
    user_id: str | None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class DocumentVersionResult:
    """One row of a document's version history (newest first)."""

    id: str
    document_id: str
    version: str | None
    file_url: str | None
    created_by: str | None
    created_at: datetime | None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StoredObject:
    """Bucket and object path of an uploaded file."""

    bucket: str
    path: str


@dataclass(frozen=True)
class UploadResult:
    """Result of a successful upload: public URL, object path, and the created record."""

    public_url: str
    path: str
    bucket: str
    document: DocumentResult


@dataclass(frozen=True)
class DocumentPage:
    """One page of an already filtered and sorted document list."""

    items: list[DocumentResult]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return (self.total + self.page_size - 1) // self.page_size
