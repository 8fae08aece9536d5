"""Document use cases: upload, query, management, and search logging."""

from doclibrary.application.use_cases.documents.document_management import (
    DocumentManagementService,
)
from doclibrary.application.use_cases.documents.document_operations import (
    DocumentQueryService,
    DocumentUploadService,
    paginate,
    resolve_bucket,
)
from doclibrary.application.use_cases.documents.search_log import SearchLogService

__all__ = [
    "DocumentManagementService",
    "DocumentQueryService",
    "DocumentUploadService",
    "SearchLogService",
    "paginate",
    "resolve_bucket",
]
