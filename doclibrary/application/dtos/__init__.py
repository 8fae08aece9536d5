"""Application DTOs (no dependency on the table API)."""

from doclibrary.application.dtos.document import (
    DocumentCreate,
    DocumentPage,
    DocumentResult,
    DocumentVersionResult,
    FileUpload,
    StoredObject,
    UploadResult,
)
from doclibrary.application.dtos.payment import (
    CheckoutResult,
    MobileMoneyInitiation,
    PaymentIntent,
    PaymentStats,
    PaymentView,
)
from doclibrary.application.dtos.subscription import (
    SubscriptionCreate,
    SubscriptionResult,
    SubscriptionStats,
    SubscriptionUpdate,
    SubscriptionView,
)
from doclibrary.application.dtos.user import (
    AuthSession,
    AuthUser,
    UserProfile,
    UserStats,
    UserUpdate,
    UserView,
)

__all__ = [
    "AuthSession",
    "AuthUser",
    "CheckoutResult",
    "DocumentCreate",
    "DocumentPage",
    "DocumentResult",
    "DocumentVersionResult",
    "FileUpload",
    "MobileMoneyInitiation",
    "PaymentIntent",
    "PaymentStats",
    "PaymentView",
    "StoredObject",
    "SubscriptionCreate",
    "SubscriptionResult",
    "SubscriptionStats",
    "SubscriptionUpdate",
    "SubscriptionView",
    "UploadResult",
    "UserProfile",
    "UserStats",
    "UserUpdate",
    "UserView",
]
