"""Application use cases: one entry point per workflow."""

from doclibrary.application.use_cases.documents import (
    DocumentManagementService,
    DocumentQueryService,
    DocumentUploadService,
    SearchLogService,
)
from doclibrary.application.use_cases.payments import (
    CheckoutService,
    PaymentReportService,
)
from doclibrary.application.use_cases.subscriptions import SubscriptionAdminService
from doclibrary.application.use_cases.users import UserAdminService

__all__ = [
    "CheckoutService",
    "DocumentManagementService",
    "DocumentQueryService",
    "DocumentUploadService",
    "PaymentReportService",
    "SearchLogService",
    "SubscriptionAdminService",
    "UserAdminService",
]
