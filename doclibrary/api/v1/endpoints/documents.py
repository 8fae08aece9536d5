"""Document API: thin routes delegating to the document use cases."""

import json
import time
from datetime import datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from doclibrary.api.v1.dependencies import (
    OptionalSession,
    get_document_management_service,
    get_document_query_service,
    get_document_upload_service,
    get_search_log_service,
)
from doclibrary.application.dtos.document import FileUpload
from doclibrary.application.use_cases.documents import (
    DocumentManagementService,
    DocumentQueryService,
    DocumentUploadService,
    SearchLogService,
    paginate,
)
from doclibrary.core.limiter import limit_upload, limit_writes
from doclibrary.domain.exceptions import ValidationException
from doclibrary.domain.value_objects import DateRange, DocumentFilter, DocumentSort
from doclibrary.schemas.document import (
    DocumentAccessResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentUpdate,
    DocumentUploadResponse,
    DocumentVersionItem,
)

router = APIRouter()


def _parse_metadata_field(raw: str | None) -> dict | None:
    """Decode the optional JSON metadata form field."""
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationException("metadata must be a JSON object", field="metadata") from e
    if not isinstance(value, dict):
        raise ValidationException("metadata must be a JSON object", field="metadata")
    return value


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    session: OptionalSession,
    category: str | None = None,
    subcategory: str | None = None,
    status: str | None = None,
    date_start: datetime | None = None,
    date_end: datetime | None = None,
    type: Annotated[list[str] | None, Query()] = None,
    keywords: Annotated[list[str] | None, Query()] = None,
    sort: str = "created_at",
    direction: Literal["asc", "desc"] = "desc",
    limit: int | None = Query(None, ge=0),
    offset: int | None = Query(None, ge=0),
    page: int | None = Query(None, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    query_svc: DocumentQueryService = Depends(get_document_query_service),
    search_log: SearchLogService = Depends(get_search_log_service),
):
    """List documents matching filters. With page set, the filtered list is paginated here."""
    date_range = None
    if date_start is not None or date_end is not None:
        date_range = DateRange(start=date_start, end=date_end)
    filters = DocumentFilter(
        category=category,
        subcategory=subcategory,
        status=status,
        date_range=date_range,
        types=tuple(type or ()),
        keywords=tuple(keywords or ()),
    )
    started = time.perf_counter()
    items = await query_svc.fetch_documents(
        filters, DocumentSort(field=sort, direction=direction), limit=limit, offset=offset
    )
    if filters.has_keywords:
        await search_log.log_search(
            " ".join(filters.keywords),
            session.user_id if session else None,
            len(items),
            time.perf_counter() - started,
        )

    if page is None:
        return DocumentListResponse(
            items=[DocumentResponse.model_validate(d) for d in items],
            total=len(items),
        )
    result = paginate(items, page, page_size)
    return DocumentListResponse(
        items=[DocumentResponse.model_validate(d) for d in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.post("", response_model=DocumentUploadResponse, status_code=201)
@limit_upload
async def upload_document(
    request: Request,
    session: OptionalSession,
    file: UploadFile = File(...),
    category: str = Form(...),
    subcategory: str = Form(...),
    metadata: str | None = Form(None),
    last_modified: int | None = Form(None),
    upload_svc: DocumentUploadService = Depends(get_document_upload_service),
):
    """Upload a file to its category bucket and record it."""
    if not file.filename:
        raise ValidationException("Filename required", field="file")
    upload = FileUpload(
        filename=file.filename,
        data=await file.read(),
        last_modified=last_modified,
    )
    result = await upload_svc.upload_document(
        session,
        upload,
        category,
        subcategory,
        _parse_metadata_field(metadata),
    )
    return DocumentUploadResponse(
        public_url=result.public_url,
        path=result.path,
        bucket=result.bucket,
        document=DocumentResponse.model_validate(result.document),
    )


@router.get("/{document_id}/versions", response_model=list[DocumentVersionItem])
async def get_document_versions(
    document_id: str,
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    """Version history, newest first."""
    await query_svc.get_document(document_id)
    versions = await query_svc.get_versions(document_id)
    return [DocumentVersionItem.model_validate(v) for v in versions]


@router.get("/{document_id}/access", response_model=DocumentAccessResponse)
async def check_document_access(
    document_id: str,
    session: OptionalSession,
    management: DocumentManagementService = Depends(get_document_management_service),
):
    """Whether the caller's subscription tier may download the document."""
    allowed = await management.check_document_access(session, document_id)
    return DocumentAccessResponse(document_id=document_id, has_access=allowed)


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    query_svc: DocumentQueryService = Depends(get_document_query_service),
):
    document = await query_svc.get_document(document_id)
    return DocumentResponse.model_validate(document)


@router.patch("/{document_id}", response_model=DocumentResponse)
@limit_writes
async def update_document(
    request: Request,
    document_id: str,
    body: DocumentUpdate,
    session: OptionalSession,
    management: DocumentManagementService = Depends(get_document_management_service),
):
    """Update title/subcategory and merge metadata over the stored metadata (admin)."""
    updated = await management.update_document(
        session,
        document_id,
        title=body.title,
        subcategory=body.subcategory,
        metadata=body.metadata,
    )
    return DocumentResponse.model_validate(updated)


@router.post("/{document_id}/archive", response_model=DocumentResponse)
@limit_writes
async def archive_document(
    request: Request,
    document_id: str,
    session: OptionalSession,
    management: DocumentManagementService = Depends(get_document_management_service),
):
    updated = await management.archive_document(session, document_id)
    return DocumentResponse.model_validate(updated)


@router.post("/{document_id}/restore", response_model=DocumentResponse)
@limit_writes
async def restore_document(
    request: Request,
    document_id: str,
    session: OptionalSession,
    management: DocumentManagementService = Depends(get_document_management_service),
):
    updated = await management.restore_document(session, document_id)
    return DocumentResponse.model_validate(updated)


@router.delete("/{document_id}", status_code=204)
@limit_writes
async def delete_document(
    request: Request,
    document_id: str,
    session: OptionalSession,
    query_svc: DocumentQueryService = Depends(get_document_query_service),
    management: DocumentManagementService = Depends(get_document_management_service),
):
    """Delete the stored file, then the record (admin)."""
    document = await query_svc.get_document(document_id)
    await management.delete_document(session, document)
