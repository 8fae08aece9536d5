"""Document operations: upload (write) and query (read) with single responsibilities."""

from __future__ import annotations

import logging
import os
from typing import Any

from doclibrary.application.dtos.document import (
    DocumentCreate,
    DocumentPage,
    DocumentResult,
    DocumentVersionResult,
    FileUpload,
    UploadResult,
)
from doclibrary.application.interfaces.repositories import (
    IDocumentRepository,
    IDocumentStorage,
)
from doclibrary.application.services.authorization_service import AuthorizationService
from doclibrary.application.services.two_step_write import TwoStepWrite
from doclibrary.core.constants import (
    BUCKET_MAP,
    INITIAL_DOCUMENT_VERSION,
    get_document_type_from_extension,
    is_valid_document_type,
)
from doclibrary.domain.enums import DocumentStatus
from doclibrary.domain.exceptions import (
    AuthenticationException,
    DocLibraryException,
    ResourceNotFoundException,
    UnknownCategoryException,
    UnsupportedTypeException,
    ValidationException,
)
from doclibrary.domain.value_objects.metadata import DocumentMetadata, merge_metadata
from doclibrary.domain.value_objects.query import DocumentFilter, DocumentSort
from doclibrary.shared.context import SessionContext
from doclibrary.shared.utils.datetime import to_iso, utc_now
from doclibrary.shared.utils.generators import generate_object_name

logger = logging.getLogger(__name__)


def _sanitize_filename(filename: str) -> str:
    """Strip path separators and dangerous characters from filename."""
    name = os.path.basename(filename.replace("\\", "/"))
    name = name.replace("\x00", "").strip(". ")
    if not name:
        raise ValidationException("Filename is empty or invalid", field="file")
    return name


def _sanitize_folder(subcategory: str) -> str:
    """Subcategory is used as the object folder; it must be a single path segment."""
    folder = subcategory.strip()
    if not folder or "/" in folder or "\\" in folder or folder in (".", ".."):
        raise ValidationException("Invalid subcategory", field="subcategory")
    return folder


def resolve_bucket(category: str) -> str:
    """Return the storage bucket for category. Raises UnknownCategoryException."""
    bucket = BUCKET_MAP.get(category)
    if not bucket:
        raise UnknownCategoryException(category)
    return bucket


class DocumentUploadService:
    """Single responsibility: upload a file to its category bucket and create the document record.

    The record is only written after the object exists, so file_url always
    resolves; if the record cannot be written the object is removed again.
    """

    def __init__(
        self,
        storage: IDocumentStorage,
        document_repo: IDocumentRepository,
        authorization: AuthorizationService,
        *,
        require_admin: bool = True,
        max_upload_size: int | None = None,
    ) -> None:
        self.storage = storage
        self.document_repo = document_repo
        self.authorization = authorization
        self.require_admin = require_admin
        self.max_upload_size = max_upload_size

    def _base_metadata(
        self, ctx: SessionContext, file: FileUpload, document_type: str
    ) -> dict[str, Any]:
        metadata: dict[str, Any] = {
            "size": file.size,
            "type": document_type,
            "status": DocumentStatus.ACTIVE.value,
            "version": INITIAL_DOCUMENT_VERSION,
            "uploadedBy": ctx.user_id,
            "uploadDate": to_iso(utc_now()),
        }
        if file.last_modified is not None:
            metadata["lastModified"] = file.last_modified
        return metadata

    async def upload_document(
        self,
        ctx: SessionContext | None,
        file: FileUpload,
        category: str,
        subcategory: str,
        metadata: dict[str, Any] | None = None,
    ) -> UploadResult:
        """Validate, upload, and record a document. Returns public URL, path, and the record.

        Raises:
            UnsupportedTypeException: Extension not on the allow-list.
            UnknownCategoryException: Category has no bucket.
            AuthenticationException: No signed-in user.
            AuthorizationException: Admin required and caller is not an admin.
            ValidationException: Empty or oversized file, bad subcategory or metadata.
            UploadException: Storage rejected the object (including a path collision).
            CompensationFailedException: Record insert failed and the object could not be removed.
        """
        document_type = get_document_type_from_extension(file.filename)
        if not is_valid_document_type(document_type):
            raise UnsupportedTypeException(file.filename, document_type)
        bucket = resolve_bucket(category)
        if ctx is None:
            raise AuthenticationException()
        if self.require_admin:
            await self.authorization.require_admin(ctx, "document", "upload")

        title = _sanitize_filename(file.filename)
        folder = _sanitize_folder(subcategory)
        if file.size == 0:
            raise ValidationException("File is empty", field="file")
        if self.max_upload_size is not None and file.size > self.max_upload_size:
            raise ValidationException(
                f"File exceeds maximum upload size of {self.max_upload_size} bytes",
                field="file",
            )

        merged = merge_metadata(
            self._base_metadata(ctx, file, document_type), metadata or {}
        )
        record_metadata = DocumentMetadata.from_dict(merged).to_dict()

        path = f"{folder}/{generate_object_name(file.extension)}"

        async def store_object() -> str:
            return await self.storage.upload(bucket, path, file.data, document_type)

        async def insert_record(stored_path: str) -> DocumentResult:
            return await self.document_repo.create(
                DocumentCreate(
                    title=title,
                    category=category,
                    subcategory=subcategory,
                    file_url=self.storage.public_url(bucket, stored_path),
                    user_id=ctx.user_id,
                    metadata=record_metadata,
                )
            )

        async def remove_object(stored_path: str) -> None:
            await self.storage.remove(bucket, stored_path)

        write: TwoStepWrite[str, DocumentResult] = TwoStepWrite(
            "upload_document", store_object, insert_record, remove_object
        )
        try:
            document = await write.run()
        except DocLibraryException as e:
            logger.error(
                "Error uploading document to %s/%s (%s): %s",
                bucket,
                path,
                write.state.value,
                e.message,
            )
            raise
        logger.info("Uploaded document %s to %s/%s", document.id, bucket, path)
        return UploadResult(
            public_url=document.file_url,
            path=path,
            bucket=bucket,
            document=document,
        )


class DocumentQueryService:
    """Single responsibility: document list, lookup, and version history queries."""

    def __init__(self, document_repo: IDocumentRepository) -> None:
        self.document_repo = document_repo

    async def fetch_documents(
        self,
        filters: DocumentFilter | None = None,
        sort: DocumentSort | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[DocumentResult]:
        """Return documents matching filters in sort order.

        Category, subcategory, status, date range and type are evaluated by the
        store. Keywords are matched here; when keywords are given, limit and
        offset apply to the keyword-filtered rows. No limit returns every match.
        """
        filters = filters or DocumentFilter()
        sort = sort or DocumentSort()
        if limit is not None and limit < 0:
            raise ValidationException("limit must not be negative", field="limit")
        if offset is not None and offset < 0:
            raise ValidationException("offset must not be negative", field="offset")

        try:
            if not filters.has_keywords:
                return await self.document_repo.list_documents(
                    filters, sort, limit=limit, offset=offset
                )
            rows = await self.document_repo.list_documents(filters, sort)
        except DocLibraryException as e:
            logger.error("Error fetching documents: %s", e.message)
            raise

        matched = [doc for doc in rows if filters.matches_keywords(doc)]
        start = offset or 0
        end = start + limit if limit is not None else None
        return matched[start:end]

    async def get_document(self, document_id: str) -> DocumentResult:
        """Return document by ID. Raises ResourceNotFoundException if missing."""
        document = await self.document_repo.get_by_id(document_id)
        if not document:
            raise ResourceNotFoundException("document", document_id)
        return document

    async def get_versions(self, document_id: str) -> list[DocumentVersionResult]:
        """Return the document's version history, newest first."""
        return await self.document_repo.get_versions(document_id)


def paginate(items: list[DocumentResult], page: int, page_size: int) -> DocumentPage:
    """Slice an already filtered and sorted list into one page (pages start at 1)."""
    if page < 1:
        raise ValidationException("page must be at least 1", field="page")
    if page_size < 1:
        raise ValidationException("page_size must be at least 1", field="page_size")
    start = (page - 1) * page_size
    return DocumentPage(
        items=items[start : start + page_size],
        total=len(items),
        page=page,
        page_size=page_size,
    )
