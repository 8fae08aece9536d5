"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from doclibrary.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from doclibrary.api.v1.endpoints import (
    auth,
    checkout,
    documents,
    download,
    health,
    payments,
    subscriptions,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(documents.router, prefix="/documents", tags=["documents"])
api_router.include_router(download.router, prefix="/download", tags=["download"])
api_router.include_router(checkout.router, prefix="/checkout", tags=["checkout"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(
    subscriptions.router, prefix="/subscriptions", tags=["subscriptions"]
)
api_router.include_router(users.router, prefix="/users", tags=["users"])
