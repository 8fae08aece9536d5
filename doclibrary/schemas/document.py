"""Document API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentResponse(BaseModel):
    """Document record as stored (metadata uses camelCase keys)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    category: str
    subcategory: str
    file_url: str
    user_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DocumentListResponse(BaseModel):
    """Response for GET /documents. Page fields are set when page is requested."""

    items: list[DocumentResponse]
    total: int
    page: int | None = None
    page_size: int | None = None
    total_pages: int | None = None


class DocumentVersionItem(BaseModel):
    """Entry in a document's version history."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    document_id: str
    version: str | None = None
    file_url: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class DocumentUploadResponse(BaseModel):
    """Response for POST /documents (object stored and record created)."""

    public_url: str
    path: str
    bucket: str
    document: DocumentResponse


class DocumentUpdate(BaseModel):
    """Request body for PATCH /documents/{id}. Metadata is merged, not replaced."""

    title: str | None = Field(default=None, min_length=1, max_length=512)
    subcategory: str | None = Field(default=None, min_length=1, max_length=256)
    metadata: dict[str, Any] | None = None


class DocumentAccessResponse(BaseModel):
    """Response for GET /documents/{id}/access."""

    document_id: str
    has_access: bool
