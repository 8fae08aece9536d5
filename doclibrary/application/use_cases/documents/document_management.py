"""Document management: admin-only edits and deletion, and subscriber access checks."""

from __future__ import annotations

import logging
from typing import Any

from doclibrary.application.dtos.document import DocumentResult
from doclibrary.application.interfaces.repositories import (
    IDocumentRepository,
    IDocumentStorage,
)
from doclibrary.application.services.authorization_service import AuthorizationService
from doclibrary.application.services.two_step_write import TwoStepWrite
from doclibrary.domain.access_policy import has_access
from doclibrary.domain.enums import DocumentStatus
from doclibrary.domain.exceptions import DocLibraryException, ResourceNotFoundException
from doclibrary.domain.value_objects.metadata import DocumentMetadata, merge_metadata
from doclibrary.shared.context import SessionContext
from doclibrary.shared.utils.datetime import to_iso, utc_now

logger = logging.getLogger(__name__)


class DocumentManagementService:
    """Update, archive, restore and delete documents; check a caller's access to one.

    Every mutation re-reads the caller's role before acting.
    """

    def __init__(
        self,
        document_repo: IDocumentRepository,
        storage: IDocumentStorage,
        authorization: AuthorizationService,
    ) -> None:
        self.document_repo = document_repo
        self.storage = storage
        self.authorization = authorization

    async def update_document(
        self,
        ctx: SessionContext | None,
        document_id: str,
        *,
        title: str | None = None,
        subcategory: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> DocumentResult:
        """Apply a partial update. Metadata is deep-merged over the stored metadata.

        lastModifiedBy/lastModifiedAt are always stamped. Keys not named in
        metadata keep their stored values.
        """
        ctx = await self.authorization.require_admin(ctx, "document", "update")
        stored = await self.document_repo.get_by_id(document_id)
        if not stored:
            raise ResourceNotFoundException("document", document_id)

        merged = merge_metadata(stored.metadata, metadata)
        merged = merge_metadata(
            merged,
            {"lastModifiedBy": ctx.user_id, "lastModifiedAt": to_iso(utc_now())},
        )
        values: dict[str, Any] = {
            "metadata": DocumentMetadata.from_dict(merged).to_dict(),
        }
        if title is not None:
            values["title"] = title
        if subcategory is not None:
            values["subcategory"] = subcategory

        try:
            updated = await self.document_repo.update(document_id, values)
        except DocLibraryException as e:
            logger.error("Error updating document %s: %s", document_id, e.message)
            raise
        if not updated:
            raise ResourceNotFoundException("document", document_id)
        return updated

    async def archive_document(
        self, ctx: SessionContext | None, document_id: str
    ) -> DocumentResult:
        return await self.update_document(
            ctx,
            document_id,
            metadata={
                "status": DocumentStatus.ARCHIVED.value,
                "archivedAt": to_iso(utc_now()),
            },
        )

    async def restore_document(
        self, ctx: SessionContext | None, document_id: str
    ) -> DocumentResult:
        return await self.update_document(
            ctx,
            document_id,
            metadata={
                "status": DocumentStatus.ACTIVE.value,
                "restoredAt": to_iso(utc_now()),
            },
        )

    async def delete_document(
        self, ctx: SessionContext | None, document: DocumentResult
    ) -> None:
        """Delete the stored file, then the record.

        Raises InvalidURLException when file_url has no bucket/path. If the
        record delete fails after the file is gone, the record is left behind
        and CompensationFailedException is raised.
        """
        await self.authorization.require_admin(ctx, "document", "delete")
        stored = self.storage.locate(document.file_url)

        async def remove_object() -> None:
            await self.storage.remove(stored.bucket, stored.path)

        async def delete_record(_: None) -> None:
            await self.document_repo.delete(document.id)

        write: TwoStepWrite[None, None] = TwoStepWrite(
            "delete_document", remove_object, delete_record, None
        )
        try:
            await write.run()
        except DocLibraryException as e:
            logger.error(
                "Error deleting document %s (%s): %s",
                document.id,
                write.state.value,
                e.message,
            )
            raise
        logger.info("Deleted document %s (%s/%s)", document.id, stored.bucket, stored.path)

    async def check_document_access(
        self, ctx: SessionContext | None, document_id: str
    ) -> bool:
        """Return True if the caller's tier reaches the document's access level.

        Fails closed: no caller, no tier, a missing document or any remote
        error returns False.
        """
        if ctx is None:
            return False
        try:
            tier = await self.authorization.get_subscription_tier(ctx.user_id)
            if not tier:
                return False
            document = await self.document_repo.get_by_id(document_id)
            if not document:
                return False
            level = DocumentMetadata.from_dict(document.metadata).effective_access_level
        except DocLibraryException as e:
            logger.error("Error checking document access for %s: %s", document_id, e.message)
            return False
        return has_access(tier, level)
