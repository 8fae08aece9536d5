"""Pydantic request/response schemas for the API."""

from doclibrary.schemas.checkout import (
    CardCheckoutRequest,
    CheckoutConfigResponse,
    CheckoutResponse,
    MobileMoneyCheckoutRequest,
    PlanRequest,
)
from doclibrary.schemas.document import (
    DocumentAccessResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentUpdate,
    DocumentUploadResponse,
    DocumentVersionItem,
)
from doclibrary.schemas.health import HealthResponse
from doclibrary.schemas.payment import (
    PaymentResponse,
    PaymentStatsResponse,
    PaymentStatusUpdate,
)
from doclibrary.schemas.subscription import (
    SubscriptionResponse,
    SubscriptionStatsResponse,
    SubscriptionUpdateRequest,
)
from doclibrary.schemas.user import (
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    UserProfileResponse,
    UserResponse,
    UserStatsResponse,
    UserUpdateRequest,
)

__all__ = [
    "CardCheckoutRequest",
    "CheckoutConfigResponse",
    "CheckoutResponse",
    "DocumentAccessResponse",
    "DocumentListResponse",
    "DocumentResponse",
    "DocumentUpdate",
    "DocumentUploadResponse",
    "DocumentVersionItem",
    "HealthResponse",
    "MobileMoneyCheckoutRequest",
    "PaymentResponse",
    "PaymentStatsResponse",
    "PaymentStatusUpdate",
    "PlanRequest",
    "SessionResponse",
    "SignInRequest",
    "SignUpRequest",
    "SubscriptionResponse",
    "SubscriptionStatsResponse",
    "SubscriptionUpdateRequest",
    "UserProfileResponse",
    "UserResponse",
    "UserStatsResponse",
    "UserUpdateRequest",
]
