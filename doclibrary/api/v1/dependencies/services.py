"""Use case dependencies (composition root).

Each getter builds one application service from repositories and settings.
Tests override these with app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, Request

from doclibrary.application.services.authorization_service import AuthorizationService
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
from doclibrary.core.config import Settings, get_settings
from doclibrary.infrastructure.external.payments import HTTPPaymentGateway
from doclibrary.infrastructure.supabase.auth_provider import SupabaseAuthProvider
from doclibrary.infrastructure.supabase.repositories import (
    SupabaseDocumentRepository,
    SupabaseDocumentStorage,
    SupabasePaymentRepository,
    SupabaseSearchLogRepository,
    SupabaseSubscriptionRepository,
    SupabaseUserRepository,
)

from .auth import get_authorization_service
from .supabase import (
    get_auth_provider,
    get_document_repo,
    get_document_storage,
    get_payment_repo,
    get_search_log_repo,
    get_subscription_repo,
    get_user_repo,
)

SettingsDep = Annotated[Settings, Depends(get_settings)]
AuthorizationDep = Annotated[AuthorizationService, Depends(get_authorization_service)]


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client created in lifespan."""
    return request.app.state.http_client


def get_document_upload_service(
    storage: Annotated[SupabaseDocumentStorage, Depends(get_document_storage)],
    document_repo: Annotated[SupabaseDocumentRepository, Depends(get_document_repo)],
    authorization: AuthorizationDep,
    settings: SettingsDep,
) -> DocumentUploadService:
    """Build DocumentUploadService (storage + document repo + role check per upload policy)."""
    return DocumentUploadService(
        storage,
        document_repo,
        authorization,
        require_admin=settings.upload_requires_admin,
        max_upload_size=settings.max_upload_size,
    )


def get_document_query_service(
    document_repo: Annotated[SupabaseDocumentRepository, Depends(get_document_repo)],
) -> DocumentQueryService:
    return DocumentQueryService(document_repo)


def get_document_management_service(
    document_repo: Annotated[SupabaseDocumentRepository, Depends(get_document_repo)],
    storage: Annotated[SupabaseDocumentStorage, Depends(get_document_storage)],
    authorization: AuthorizationDep,
) -> DocumentManagementService:
    return DocumentManagementService(document_repo, storage, authorization)


def get_search_log_service(
    search_log_repo: Annotated[SupabaseSearchLogRepository, Depends(get_search_log_repo)],
) -> SearchLogService:
    return SearchLogService(search_log_repo)


def get_checkout_service(
    subscription_repo: Annotated[
        SupabaseSubscriptionRepository, Depends(get_subscription_repo)
    ],
    user_repo: Annotated[SupabaseUserRepository, Depends(get_user_repo)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: SettingsDep,
) -> CheckoutService:
    """Build CheckoutService with the payment backend client on the shared HTTP pool."""
    gateway = HTTPPaymentGateway(settings.payment_api_base_url, http_client=http_client)
    return CheckoutService(
        subscription_repo, user_repo, gateway, currency=settings.payment_currency
    )


def get_payment_report_service(
    payment_repo: Annotated[SupabasePaymentRepository, Depends(get_payment_repo)],
    authorization: AuthorizationDep,
) -> PaymentReportService:
    return PaymentReportService(payment_repo, authorization)


def get_subscription_admin_service(
    subscription_repo: Annotated[
        SupabaseSubscriptionRepository, Depends(get_subscription_repo)
    ],
    authorization: AuthorizationDep,
) -> SubscriptionAdminService:
    return SubscriptionAdminService(subscription_repo, authorization)


def get_user_admin_service(
    user_repo: Annotated[SupabaseUserRepository, Depends(get_user_repo)],
    auth: Annotated[SupabaseAuthProvider, Depends(get_auth_provider)],
    authorization: AuthorizationDep,
) -> UserAdminService:
    return UserAdminService(user_repo, auth, authorization)
